# Overview: Flask API routes for the product catalog; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import StoreError
from ..services import products_service
from .responses import error_response, internal_error

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """List every product, newest first."""
    try:
        products = products_service.get_all_products()
        return jsonify({"items": [p.to_dict() for p in products], "count": len(products)})
    except StoreError as e:
        return error_response(e)


@products_bp.get("/catalog")
def catalog():
    """Products with status 'available' only."""
    try:
        products = products_service.get_available_products()
        return jsonify({"items": [p.to_dict() for p in products], "count": len(products)})
    except StoreError as e:
        return error_response(e)


@products_bp.post("")
def create_product_route():
    """
    Create a product, optionally with its opening stock.

    Body: product_name, unit_price, product_type, status, [description],
    [quantity_in_stock]
    """
    payload = dict(request.get_json(silent=True) or {})
    quantity = payload.pop("quantity_in_stock", None)
    try:
        created = products_service.create_product_with_stock(payload, quantity)
        return created.to_dict(), 201
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create product")
        return internal_error()


@products_bp.get("/<product_id>")
def get_product_route(product_id):
    try:
        product = products_service.get_product_by_id(product_id)
    except StoreError as e:
        return error_response(e)
    if product is None:
        return {"error": "Product not found"}, 404
    return product.to_dict()


@products_bp.patch("/<product_id>")
def update_product_route(product_id):
    payload = request.get_json(silent=True) or {}
    try:
        updated = products_service.update_product(product_id, payload)
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update product")
        return internal_error()
    if updated is None:
        return {"error": "Product not found"}, 404
    return updated.to_dict()


@products_bp.delete("/<product_id>")
def delete_product_route(product_id):
    try:
        deleted = products_service.delete_product(product_id)
    except StoreError as e:
        return error_response(e)
    if not deleted:
        return {"error": "Product not found"}, 404
    return {"deleted": True}
