# Overview: Data access for sale line items. Items are never updated after insert.

from __future__ import annotations

from decimal import Decimal

from ..entities import SaleItemRecord
from ..extensions import db
from ..models import SaleItem
from .base import finish, wraps_storage_errors


@wraps_storage_errors("Failed to create sale item")
def create(
    *,
    sale_id: int,
    product_id: int,
    quantity: int,
    price_at_sale: Decimal,
    commit: bool = True,
) -> SaleItemRecord:
    item = SaleItem(
        sale_id=sale_id,
        product_id=product_id,
        quantity=quantity,
        price_at_sale=price_at_sale,
    )
    db.session.add(item)
    finish(commit)
    return SaleItemRecord.from_model(item)


@wraps_storage_errors("Failed to retrieve sale items")
def find_all() -> list[SaleItemRecord]:
    rows = db.session.query(SaleItem).order_by(SaleItem.sale_item_id.desc()).all()
    return [SaleItemRecord.from_model(i) for i in rows]


@wraps_storage_errors("Failed to find sale item by ID")
def find_by_id(sale_item_id: int) -> SaleItemRecord | None:
    item = db.session.get(SaleItem, sale_item_id)
    return SaleItemRecord.from_model(item) if item else None


@wraps_storage_errors("Failed to find sale items by sale ID")
def find_by_sale_id(sale_id: int) -> list[SaleItemRecord]:
    rows = (
        db.session.query(SaleItem)
        .filter(SaleItem.sale_id == sale_id)
        .order_by(SaleItem.sale_item_id.asc())
        .all()
    )
    return [SaleItemRecord.from_model(i) for i in rows]


@wraps_storage_errors("Failed to delete sale item")
def delete(sale_item_id: int) -> bool:
    deleted = db.session.query(SaleItem).filter(SaleItem.sale_item_id == sale_item_id).delete()
    db.session.commit()
    return deleted > 0
