# Overview: Flask API routes for stock levels; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import StoreError
from ..services import inventory_service
from .responses import error_response, internal_error

inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


@inventory_bp.get("")
def list_inventory():
    try:
        rows = inventory_service.get_all_inventory()
        return jsonify({"items": [r.to_dict() for r in rows], "count": len(rows)})
    except StoreError as e:
        return error_response(e)


@inventory_bp.get("/details")
def inventory_details():
    """Inventory joined with product name, price, type and status."""
    try:
        rows = inventory_service.get_all_with_details()
        return jsonify({"items": [r.to_dict() for r in rows], "count": len(rows)})
    except StoreError as e:
        return error_response(e)


@inventory_bp.get("/low-stock")
def low_stock():
    """
    Query params:
    - threshold: int (optional) - rows strictly below it are listed (default 5)
    """
    try:
        rows = inventory_service.get_low_stock_products(request.args.get("threshold"))
        return jsonify({"items": [r.to_dict() for r in rows], "count": len(rows)})
    except StoreError as e:
        return error_response(e)


@inventory_bp.get("/<product_id>")
def get_inventory_route(product_id):
    try:
        row = inventory_service.get_inventory_by_product(product_id)
    except StoreError as e:
        return error_response(e)
    if row is None:
        return {"error": "Inventory record not found"}, 404
    return row.to_dict()


@inventory_bp.put("/<product_id>")
def set_inventory_route(product_id):
    """Set the stock level of a product, creating its row if needed."""
    payload = request.get_json(silent=True) or {}
    try:
        row = inventory_service.set_stock_level(product_id, payload.get("quantity_in_stock"))
        return row.to_dict()
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update inventory")
        return internal_error()


@inventory_bp.delete("/<product_id>")
def delete_inventory_route(product_id):
    try:
        deleted = inventory_service.delete_inventory(product_id)
    except StoreError as e:
        return error_response(e)
    if not deleted:
        return {"error": "Inventory record not found"}, 404
    return {"deleted": True}
