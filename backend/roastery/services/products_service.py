# Overview: Service-layer operations for the product catalog; validates input before any storage call.

from __future__ import annotations

from ..entities import ProductRecord, ProductUpdate
from ..errors import ValidationError, error_context
from ..extensions import db
from ..repositories import inventory_repository, products_repository
from ..repositories.base import wraps_storage_errors
from ..validation import (
    PRODUCT_STATUSES,
    parse_choice,
    parse_id,
    parse_money,
    parse_quantity,
    require_fields,
)

PRODUCT_REQUIRED_FIELDS = ("product_name", "unit_price", "product_type", "status")


def _clean_create(data: dict) -> dict:
    require_fields(data, PRODUCT_REQUIRED_FIELDS)
    description = data.get("description")
    return {
        "product_name": str(data["product_name"]).strip(),
        "description": str(description).strip() if description not in (None, "") else None,
        "unit_price": parse_money(data["unit_price"], "unit_price"),
        "product_type": str(data["product_type"]).strip(),
        "status": parse_choice(data["status"], "status", PRODUCT_STATUSES),
    }


def _clean_update(updates: dict | ProductUpdate | None) -> ProductUpdate:
    if isinstance(updates, ProductUpdate):
        updates = updates.changes()
    if not updates:
        raise ValidationError("No data provided for update")

    patch = ProductUpdate.from_dict(updates)
    if patch.is_empty():
        raise ValidationError("No data provided for update")

    cleaned = {}
    for k, v in patch.changes().items():
        if k == "unit_price":
            cleaned[k] = parse_money(v, "unit_price")
        elif k == "status":
            cleaned[k] = parse_choice(v, "status", PRODUCT_STATUSES)
        elif k == "description":
            cleaned[k] = str(v).strip()
        else:
            s = str(v).strip()
            if not s:
                raise ValidationError(f"{k} cannot be blank")
            cleaned[k] = s
    return ProductUpdate(**cleaned)


def create_product(data: dict) -> ProductRecord:
    """
    Create a product.

    Required: product_name, unit_price, product_type, status.
    status must be 'available' or 'not available'; unit_price must be >= 0.
    """
    fields = _clean_create(data or {})
    with error_context("Failed to create product"):
        return products_repository.create(**fields)


@wraps_storage_errors("Failed to create product with stock")
def _create_with_stock(fields: dict, quantity: int | None) -> ProductRecord:
    product = products_repository.create(**fields, commit=False)
    if quantity is not None:
        inventory_repository.create(
            product_id=product.product_id, quantity_in_stock=quantity, commit=False
        )
    db.session.commit()
    return product


def create_product_with_stock(data: dict, quantity_in_stock=None) -> ProductRecord:
    """
    Create a product and, when a quantity is given, its inventory row.

    Product and stock row are committed together. A blank quantity ("" or
    None) creates the product without an inventory row.
    """
    fields = _clean_create(data or {})
    quantity = None
    if quantity_in_stock is not None and str(quantity_in_stock).strip() != "":
        quantity = parse_quantity(quantity_in_stock, "quantity_in_stock", allow_zero=True)

    with error_context("Failed to create product"):
        return _create_with_stock(fields, quantity)


def get_all_products() -> list[ProductRecord]:
    with error_context("Failed to get products"):
        return products_repository.find_all()


def get_available_products() -> list[ProductRecord]:
    """Catalog view: only products whose status is 'available'."""
    with error_context("Failed to get products"):
        return products_repository.find_by_status("available")


def get_product_by_id(product_id) -> ProductRecord | None:
    product_id = parse_id(product_id, "product")
    with error_context("Failed to get product"):
        return products_repository.find_by_id(product_id)


def update_product(product_id, updates) -> ProductRecord | None:
    """
    Apply a partial update. Returns the updated product, or None if not found.

    At least one known field must be present.
    """
    product_id = parse_id(product_id, "product")
    patch = _clean_update(updates)
    with error_context("Failed to update product"):
        return products_repository.update(product_id, patch)


def delete_product(product_id) -> bool:
    product_id = parse_id(product_id, "product")
    with error_context("Failed to delete product"):
        return products_repository.delete(product_id)
