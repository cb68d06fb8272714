# Overview: Data access for the product catalog.

from __future__ import annotations

from decimal import Decimal

from ..entities import ProductRecord, ProductUpdate
from ..extensions import db
from ..models import Product
from .base import finish, wraps_storage_errors


@wraps_storage_errors("Failed to create product")
def create(
    *,
    product_name: str,
    unit_price: Decimal,
    product_type: str,
    status: str,
    description: str | None = None,
    commit: bool = True,
) -> ProductRecord:
    p = Product(
        product_name=product_name,
        description=description,
        unit_price=unit_price,
        product_type=product_type,
        status=status,
    )
    db.session.add(p)
    finish(commit)
    return ProductRecord.from_model(p)


@wraps_storage_errors("Failed to retrieve products")
def find_all() -> list[ProductRecord]:
    rows = db.session.query(Product).order_by(Product.product_id.desc()).all()
    return [ProductRecord.from_model(p) for p in rows]


@wraps_storage_errors("Failed to retrieve products by status")
def find_by_status(status: str) -> list[ProductRecord]:
    rows = (
        db.session.query(Product)
        .filter(Product.status == status)
        .order_by(Product.product_id.desc())
        .all()
    )
    return [ProductRecord.from_model(p) for p in rows]


@wraps_storage_errors("Failed to find product by ID")
def find_by_id(product_id: int) -> ProductRecord | None:
    p = db.session.get(Product, product_id)
    return ProductRecord.from_model(p) if p else None


@wraps_storage_errors("Failed to count products")
def count() -> int:
    return db.session.query(Product).count()


@wraps_storage_errors("Failed to update product")
def update(product_id: int, patch: ProductUpdate, *, commit: bool = True) -> ProductRecord | None:
    p = db.session.get(Product, product_id)
    if not p:
        return None

    for k, v in patch.changes().items():
        setattr(p, k, v)

    finish(commit)
    return ProductRecord.from_model(p)


@wraps_storage_errors("Failed to delete product")
def delete(product_id: int) -> bool:
    """Delete a product together with its inventory row."""
    p = db.session.get(Product, product_id)
    if not p:
        return False
    db.session.delete(p)
    db.session.commit()
    return True
