# Overview: Data access for stock levels, including the joined product views.

from __future__ import annotations

from ..entities import InventoryDetail, InventoryRecord
from ..extensions import db
from ..models import Inventory, Product
from roastery.time_utils import utcnow
from .base import finish, wraps_storage_errors

DEFAULT_LOW_STOCK_THRESHOLD = 5


@wraps_storage_errors("Failed to create inventory record")
def create(*, product_id: int, quantity_in_stock: int, commit: bool = True) -> InventoryRecord:
    inv = Inventory(product_id=product_id, quantity_in_stock=quantity_in_stock, last_updated=utcnow())
    db.session.add(inv)
    finish(commit)
    return InventoryRecord.from_model(inv)


@wraps_storage_errors("Failed to retrieve inventory records")
def find_all() -> list[InventoryRecord]:
    rows = db.session.query(Inventory).order_by(Inventory.inventory_id.desc()).all()
    return [InventoryRecord.from_model(inv) for inv in rows]


@wraps_storage_errors("Failed to find inventory by product ID")
def find_by_product_id(product_id: int) -> InventoryRecord | None:
    inv = db.session.query(Inventory).filter(Inventory.product_id == product_id).first()
    return InventoryRecord.from_model(inv) if inv else None


@wraps_storage_errors("Failed to update inventory")
def update(product_id: int, quantity_in_stock: int, *, commit: bool = True) -> InventoryRecord | None:
    inv = db.session.query(Inventory).filter(Inventory.product_id == product_id).first()
    if not inv:
        return None

    inv.quantity_in_stock = quantity_in_stock
    inv.last_updated = utcnow()
    finish(commit)
    return InventoryRecord.from_model(inv)


def _joined_query():
    return db.session.query(Inventory, Product).join(Product, Inventory.product_id == Product.product_id)


@wraps_storage_errors("Failed to retrieve inventory with details")
def find_all_with_details() -> list[InventoryDetail]:
    rows = _joined_query().order_by(Inventory.inventory_id.desc()).all()
    return [InventoryDetail.from_row(inv, product) for inv, product in rows]


@wraps_storage_errors("Failed to find low stock items")
def find_by_low_stock(threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[InventoryDetail]:
    """Rows with quantity strictly below threshold, lowest first."""
    rows = (
        _joined_query()
        .filter(Inventory.quantity_in_stock < threshold)
        .order_by(Inventory.quantity_in_stock.asc(), Inventory.inventory_id.asc())
        .all()
    )
    return [InventoryDetail.from_row(inv, product) for inv, product in rows]


@wraps_storage_errors("Failed to delete inventory record")
def delete(product_id: int) -> bool:
    deleted = db.session.query(Inventory).filter(Inventory.product_id == product_id).delete()
    db.session.commit()
    return deleted > 0
