# Overview: Data access for sale headers: lookups, date windows and aggregates.

from __future__ import annotations

from datetime import date

from sqlalchemy import func

from ..entities import SaleRecord
from ..extensions import db
from ..models import Sale
from ..validation import to_money
from roastery.time_utils import day_bounds
from .base import finish, wraps_storage_errors


@wraps_storage_errors("Failed to create sale")
def create(user_id: int, *, commit: bool = True) -> SaleRecord:
    """Insert a sale with every money field at zero."""
    sale = Sale(
        user_id=user_id,
        subtotal=0,
        discount_percentage=0,
        discount_amount=0,
        total_amount=0,
    )
    db.session.add(sale)
    finish(commit)
    return SaleRecord.from_model(sale)


@wraps_storage_errors("Failed to update sale totals")
def update_totals(sale_id: int, totals, *, commit: bool = True) -> SaleRecord | None:
    """
    Persist subtotal, discount_percentage, discount_amount and total_amount
    from one SaleTotals value. There is no way to write them separately.
    """
    sale = db.session.get(Sale, sale_id)
    if not sale:
        return None

    sale.subtotal = totals.subtotal
    sale.discount_percentage = totals.discount_percentage
    sale.discount_amount = totals.discount_amount
    sale.total_amount = totals.total_amount

    finish(commit)
    return SaleRecord.from_model(sale)


@wraps_storage_errors("Failed to retrieve sales")
def find_all(limit: int | None = None) -> list[SaleRecord]:
    query = db.session.query(Sale).order_by(Sale.sale_id.desc())
    if limit is not None:
        query = query.limit(limit)
    rows = query.all()
    return [SaleRecord.from_model(s) for s in rows]


@wraps_storage_errors("Failed to find sale by ID")
def find_by_id(sale_id: int) -> SaleRecord | None:
    sale = db.session.get(Sale, sale_id)
    return SaleRecord.from_model(sale) if sale else None


@wraps_storage_errors("Failed to find sales between dates")
def find_between_dates(start: date, end: date) -> list[SaleRecord]:
    """Sales whose calendar date lies in start..end inclusive, newest first."""
    lower, upper = day_bounds(start, end)
    rows = (
        db.session.query(Sale)
        .filter(Sale.sale_date >= lower, Sale.sale_date < upper)
        .order_by(Sale.sale_date.desc(), Sale.sale_id.desc())
        .all()
    )
    return [SaleRecord.from_model(s) for s in rows]


@wraps_storage_errors("Failed to find sales by customer")
def find_by_customer(user_id: int) -> list[SaleRecord]:
    rows = (
        db.session.query(Sale)
        .filter(Sale.user_id == user_id)
        .order_by(Sale.sale_id.desc())
        .all()
    )
    return [SaleRecord.from_model(s) for s in rows]


@wraps_storage_errors("Failed to get sales total")
def get_total():
    total = db.session.query(func.coalesce(func.sum(Sale.total_amount), 0)).scalar()
    return to_money(total)


@wraps_storage_errors("Failed to get sales count")
def get_count() -> int:
    return int(db.session.query(func.count(Sale.sale_id)).scalar() or 0)


@wraps_storage_errors("Failed to delete sale")
def delete(sale_id: int) -> bool:
    sale = db.session.get(Sale, sale_id)
    if not sale:
        return False
    # ORM delete so the items cascade on every backend
    db.session.delete(sale)
    db.session.commit()
    return True
