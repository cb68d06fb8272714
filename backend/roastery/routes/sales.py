# Overview: Flask API routes for sales; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import StoreError
from ..services import sales_service
from ..validation import parse_id
from .responses import error_response, internal_error

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("")
def list_sales():
    """
    List sales, newest first.

    Query params:
    - start_date, end_date: DD/MM/YYYY (optional, both or neither)
    - user_id: int (optional) - only this customer's sales
    """
    start_date = request.args.get("start_date")
    end_date = request.args.get("end_date")
    user_id = request.args.get("user_id")

    if bool(start_date) != bool(end_date):
        return {"error": "Please provide both start and end dates to filter by range."}, 400

    try:
        if start_date:
            sales = sales_service.get_sales_between_dates(start_date, end_date)
        else:
            sales = sales_service.get_all_sales()

        if user_id:
            owner = parse_id(user_id, "user")
            sales = [s for s in sales if s.user_id == owner]

        return jsonify({"items": [s.to_dict() for s in sales], "count": len(sales)})
    except StoreError as e:
        return error_response(e)


@sales_bp.get("/stats")
def sales_stats():
    try:
        return {
            "total_amount": float(sales_service.get_total()),
            "count": sales_service.get_count(),
        }
    except StoreError as e:
        return error_response(e)


@sales_bp.post("")
def create_sale_route():
    """
    Check out a cart atomically.

    Body: user_id, items: [{product_id, quantity, price_at_sale}], [discount_percentage]
    """
    data = request.get_json(silent=True) or {}
    try:
        sale = sales_service.create_sale_with_items(
            data.get("user_id"),
            data.get("items"),
            data.get("discount_percentage", 0),
        )
        return {"sale": sale.to_dict()}, 201
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create sale")
        return internal_error()


@sales_bp.get("/<sale_id>")
def get_sale_route(sale_id):
    """Sale with its items."""
    try:
        found = sales_service.get_sale_with_items(sale_id)
    except StoreError as e:
        return error_response(e)
    if found is None:
        return {"error": "Sale not found"}, 404

    sale, items = found
    return {"sale": sale.to_dict(), "items": [i.to_dict() for i in items]}


@sales_bp.post("/<sale_id>/discount")
def apply_discount_route(sale_id):
    data = request.get_json(silent=True) or {}
    try:
        sale = sales_service.apply_discount(sale_id, data.get("discount_percentage"))
        return {"sale": sale.to_dict()}
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to apply discount")
        return internal_error()


@sales_bp.delete("/<sale_id>")
def delete_sale_route(sale_id):
    try:
        deleted = sales_service.delete_sale(sale_id)
    except StoreError as e:
        return error_response(e)
    if not deleted:
        return {"error": "Sale not found"}, 404
    return {"deleted": True}
