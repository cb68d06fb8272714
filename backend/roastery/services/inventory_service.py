# Overview: Service-layer operations for inventory; stock levels, joined views and low-stock reporting.

from __future__ import annotations

from flask import current_app

from ..entities import InventoryDetail, InventoryRecord
from ..errors import ConflictError, NotFoundError, ValidationError, error_context
from ..repositories import inventory_repository, products_repository
from ..repositories.inventory_repository import DEFAULT_LOW_STOCK_THRESHOLD
from ..validation import parse_id, parse_quantity


def _default_threshold() -> int:
    return int(current_app.config.get("LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD))


def get_all_inventory() -> list[InventoryRecord]:
    with error_context("Failed to get inventory"):
        return inventory_repository.find_all()


def get_inventory_by_product(product_id) -> InventoryRecord | None:
    product_id = parse_id(product_id, "product")
    with error_context("Failed to get inventory"):
        return inventory_repository.find_by_product_id(product_id)


def create_inventory_record(product_id, quantity_in_stock) -> InventoryRecord:
    """
    Create the single inventory row for a product.

    Raises:
        NotFoundError: product does not exist
        ConflictError: the product already has an inventory row
    """
    product_id = parse_id(product_id, "product")
    quantity = parse_quantity(quantity_in_stock, "quantity_in_stock", allow_zero=True)

    with error_context("Failed to create inventory record"):
        if products_repository.find_by_id(product_id) is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})
        if inventory_repository.find_by_product_id(product_id) is not None:
            raise ConflictError(
                "Inventory record already exists for this product",
                details={"product_id": product_id},
            )
        return inventory_repository.create(product_id=product_id, quantity_in_stock=quantity)


def update_inventory(product_id, quantity_in_stock) -> InventoryRecord | None:
    """Set the quantity for a product's row. Returns None if the product has no row."""
    product_id = parse_id(product_id, "product")
    quantity = parse_quantity(quantity_in_stock, "quantity_in_stock", allow_zero=True)
    with error_context("Failed to update inventory"):
        return inventory_repository.update(product_id, quantity)


def set_stock_level(product_id, quantity_in_stock) -> InventoryRecord:
    """Update the product's inventory row, creating it first if it is missing."""
    product_id = parse_id(product_id, "product")
    quantity = parse_quantity(quantity_in_stock, "quantity_in_stock", allow_zero=True)
    with error_context("Failed to set stock level"):
        updated = inventory_repository.update(product_id, quantity)
        if updated is not None:
            return updated
    return create_inventory_record(product_id, quantity)


def get_all_with_details() -> list[InventoryDetail]:
    with error_context("Failed to get inventory with details"):
        return inventory_repository.find_all_with_details()


def get_low_stock_products(threshold=None) -> list[InventoryDetail]:
    """
    Inventory rows whose quantity is strictly below threshold, lowest first.

    threshold defaults to LOW_STOCK_THRESHOLD (5).
    """
    if threshold is None or (isinstance(threshold, str) and not threshold.strip()):
        threshold = _default_threshold()
    else:
        try:
            threshold = parse_quantity(threshold, "threshold", allow_zero=True)
        except ValidationError:
            raise ValidationError("Invalid low stock threshold")

    with error_context("Failed to get low stock products"):
        return inventory_repository.find_by_low_stock(threshold)


def delete_inventory(product_id) -> bool:
    product_id = parse_id(product_id, "product")
    with error_context("Failed to delete inventory record"):
        return inventory_repository.delete(product_id)
