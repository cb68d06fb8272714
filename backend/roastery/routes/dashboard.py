# Overview: Flask API routes for dashboard summaries.

from flask import Blueprint, request

from ..errors import StoreError
from ..services import dashboard_service
from .responses import error_response

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("/admin")
def admin_dashboard():
    """
    Query params:
    - threshold: int (optional) - low stock cut-off (default DASHBOARD_LOW_STOCK_THRESHOLD)
    """
    threshold = request.args.get("threshold", type=int)
    try:
        summary = dashboard_service.admin_summary(threshold)
    except StoreError as e:
        return error_response(e)

    stats = dict(summary["stats"])
    stats["total_revenue"] = float(stats["total_revenue"])
    return {
        "stats": stats,
        "recent_sales": [s.to_dict() for s in summary["recent_sales"]],
        "low_stock": [r.to_dict() for r in summary["low_stock"]],
    }


@dashboard_bp.get("/customer/<user_id>")
def customer_dashboard(user_id):
    try:
        summary = dashboard_service.customer_summary(user_id)
    except StoreError as e:
        return error_response(e)

    return {
        "total_orders": summary["total_orders"],
        "total_spent": float(summary["total_spent"]),
        "recent_orders": [s.to_dict() for s in summary["recent_orders"]],
    }
