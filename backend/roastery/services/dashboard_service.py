# Overview: Summary figures for the admin and customer dashboards.

from __future__ import annotations

from decimal import Decimal

from flask import current_app

from ..errors import error_context
from ..repositories import products_repository
from ..validation import parse_id, to_money
from roastery.time_utils import to_display_date, today
from . import inventory_service, sales_service

RECENT_SALES_LIMIT = 10
LOW_STOCK_PREVIEW_LIMIT = 5
RECENT_ORDERS_LIMIT = 5


def _dashboard_threshold() -> int:
    return int(current_app.config.get("DASHBOARD_LOW_STOCK_THRESHOLD", 10))


def admin_summary(low_stock_threshold: int | None = None) -> dict:
    """
    Store-wide figures.

    Returns:
        {
            "stats": {total_revenue, total_sales, total_products,
                      low_stock_count, today_sales},
            "recent_sales": newest 10 sales,
            "low_stock": 5 lowest stock rows below the threshold,
        }
    """
    if low_stock_threshold is None:
        low_stock_threshold = _dashboard_threshold()

    recent_sales = sales_service.get_all_sales(RECENT_SALES_LIMIT)
    low_stock = inventory_service.get_low_stock_products(low_stock_threshold)
    with error_context("Failed to count products"):
        total_products = products_repository.count()

    today_str = to_display_date(today())
    todays_sales = sales_service.get_sales_between_dates(today_str, today_str)

    return {
        "stats": {
            "total_revenue": sales_service.get_total(),
            "total_sales": sales_service.get_count(),
            "total_products": total_products,
            "low_stock_count": len(low_stock),
            "today_sales": len(todays_sales),
        },
        "recent_sales": recent_sales,
        "low_stock": low_stock[:LOW_STOCK_PREVIEW_LIMIT],
    }


def customer_summary(user_id) -> dict:
    """Order count, lifetime spend and the five newest orders of one customer."""
    user_id = parse_id(user_id, "user")
    orders = sales_service.get_sales_by_customer(user_id)
    return {
        "total_orders": len(orders),
        "total_spent": to_money(sum((s.total_amount for s in orders), Decimal("0"))),
        "recent_orders": orders[:RECENT_ORDERS_LIMIT],
    }
