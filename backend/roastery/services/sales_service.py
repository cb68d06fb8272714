# Overview: Service-layer operations for sales; the atomic checkout workflow, discounts and reporting queries.

"""
Sales Service

create_sale_with_items() is the one multi-row write in the back office:

1. open a TransactionScope
2. insert the sale with zero totals
3. per line, in input order: lock the product's inventory row, check stock,
   insert the sale item, decrement stock, add price_at_sale * quantity to
   the subtotal
4. derive discount and total with pricing.calculate_totals and store them
5. commit; any failure rolls back the sale, its items and every decrement

LOCKING: one SELECT ... FOR UPDATE per product. Two checkouts for the same
product queue on that row; checkouts for different products do not wait on
each other. The subtotal only uses price_at_sale snapshots, so a price edit
made during checkout cannot change the total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from flask import current_app

from ..dto import SaleDTO
from ..entities import SaleItemRecord
from ..errors import (
    InsufficientStockError,
    NotFoundError,
    StoreError,
    ValidationError,
    error_context,
)
from ..repositories import sale_items_repository, sales_repository, users_repository
from ..validation import parse_id, parse_money, parse_percentage, parse_quantity
from roastery.time_utils import parse_display_date, utcnow
from .concurrency import TransactionScope
from .pricing import calculate_totals, line_subtotal


@dataclass(frozen=True)
class SaleLineInput:
    product_id: int
    quantity: int
    price_at_sale: Decimal


def _parse_lines(items) -> list[SaleLineInput]:
    if not items or not isinstance(items, (list, tuple)):
        raise ValidationError("Sale must have at least one item")

    lines = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Item {index + 1} must be an object")
        if any(item.get(k) in (None, "") for k in ("product_id", "quantity", "price_at_sale")):
            raise ValidationError("Each item must have product_id, quantity, and price_at_sale")
        lines.append(SaleLineInput(
            product_id=parse_id(item["product_id"], "product"),
            quantity=parse_quantity(item["quantity"]),
            price_at_sale=parse_money(item["price_at_sale"], "price_at_sale"),
        ))
    return lines


def get_all_sales(limit: int | None = None) -> list[SaleDTO]:
    """All sales newest first; limit keeps only the newest N."""
    with error_context("Failed to list sales"):
        return [SaleDTO.from_record(s) for s in sales_repository.find_all(limit)]


def get_sale_by_id(sale_id) -> SaleDTO | None:
    sale_id = parse_id(sale_id, "sale")
    with error_context("Failed to get sale"):
        sale = sales_repository.find_by_id(sale_id)
    return SaleDTO.from_record(sale) if sale else None


def get_sale_with_items(sale_id) -> tuple[SaleDTO, list[SaleItemRecord]] | None:
    """Order detail: the sale plus its items in insertion order, or None."""
    sale_id = parse_id(sale_id, "sale")
    with error_context("Failed to get sale"):
        sale = sales_repository.find_by_id(sale_id)
        if sale is None:
            return None
        items = sale_items_repository.find_by_sale_id(sale_id)
    return SaleDTO.from_record(sale), items


def get_total() -> Decimal:
    """Sum of total_amount across all sales; 0.00 when there are none."""
    with error_context("Failed to get total"):
        return sales_repository.get_total()


def get_count() -> int:
    with error_context("Failed to get sales count"):
        return sales_repository.get_count()


def get_sales_between_dates(start_date, end_date) -> list[SaleDTO]:
    """
    Sales dated start_date..end_date inclusive, newest first.

    Both dates must be DD/MM/YYYY strings naming real calendar days, and the
    window may not run backwards. Rejected before any query runs.
    """
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required")

    try:
        start = parse_display_date(str(start_date))
        end = parse_display_date(str(end_date))
    except ValueError:
        raise ValidationError("Invalid date format. Use DD/MM/YYYY")
    if start is None or end is None:
        raise ValidationError("Invalid date format. Use DD/MM/YYYY")

    if start > end:
        raise ValidationError("Start date must not be after end date")

    with error_context("Failed to get sales"):
        sales = sales_repository.find_between_dates(start, end)
    return [SaleDTO.from_record(s) for s in sales]


def get_sales_by_customer(user_id) -> list[SaleDTO]:
    user_id = parse_id(user_id, "user")
    with error_context("Failed to get sales by customer"):
        sales = sales_repository.find_by_customer(user_id)
    return [SaleDTO.from_record(s) for s in sales]


def create_sale(user_id) -> SaleDTO:
    """Create an empty sale (all totals zero) for an existing user."""
    user_id = parse_id(user_id, "user")
    with error_context("Failed to create sale"):
        if users_repository.find_by_id(user_id) is None:
            raise NotFoundError("User not found", details={"user_id": user_id})
        sale = sales_repository.create(user_id)
    return SaleDTO.from_record(sale)


def create_sale_with_items(user_id, items, discount_percentage=0) -> SaleDTO:
    """
    Create a sale, its items and the matching stock decrements atomically.

    Args:
        user_id: owner of the sale; must exist
        items: non-empty list of {"product_id", "quantity", "price_at_sale"}
        discount_percentage: 0..100, default 0

    Returns:
        SaleDTO with subtotal, discount and total filled in

    Raises:
        ValidationError: malformed input (nothing touched storage)
        NotFoundError: unknown user, or a product without an inventory row
        InsufficientStockError: a line asks for more than is in stock
        StorageError: the database failed

    Nothing from a failed attempt persists.
    """
    user_id = parse_id(user_id, "user")
    lines = _parse_lines(items)
    pct = parse_percentage(0 if discount_percentage is None else discount_percentage)

    try:
        with TransactionScope(action="Failed to create sale with items") as tx:
            if users_repository.find_by_id(user_id) is None:
                raise NotFoundError("User not found", details={"user_id": user_id})

            sale = sales_repository.create(user_id, commit=False)
            subtotal = Decimal("0")

            for line in lines:
                inventory = tx.lock_inventory(line.product_id)
                if inventory is None:
                    raise NotFoundError(
                        f"Inventory record for product {line.product_id} not found",
                        details={"product_id": line.product_id},
                    )

                available = int(inventory.quantity_in_stock)
                if available < line.quantity:
                    raise InsufficientStockError(line.product_id, available, line.quantity)

                sale_items_repository.create(
                    sale_id=sale.sale_id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_sale=line.price_at_sale,
                    commit=False,
                )

                inventory.quantity_in_stock = available - line.quantity
                inventory.last_updated = utcnow()

                subtotal += line_subtotal(line.price_at_sale, line.quantity)

            totals = calculate_totals(subtotal, pct)
            sale = sales_repository.update_totals(sale.sale_id, totals, commit=False)
    except StoreError as exc:
        current_app.logger.warning("Sale for user %s rolled back: %s", user_id, exc)
        raise

    current_app.logger.info("Sale %s committed for user %s (total %s)", sale.sale_id, user_id, sale.total_amount)
    return SaleDTO.from_record(sale)


def apply_discount(sale_id, discount_percentage) -> SaleDTO:
    """
    Re-price an existing sale with a new discount percentage.

    The stored subtotal is authoritative; items are not re-summed. Applying
    the same percentage twice yields the same discount and total.
    """
    sale_id = parse_id(sale_id, "sale")
    pct = parse_percentage(discount_percentage)

    with error_context("Failed to apply discount"):
        current = sales_repository.find_by_id(sale_id)
        if current is None:
            raise NotFoundError("Sale not found", details={"sale_id": sale_id})

        totals = calculate_totals(current.subtotal, pct)
        sale = sales_repository.update_totals(sale_id, totals)
        if sale is None:
            raise NotFoundError("Sale not found", details={"sale_id": sale_id})
    return SaleDTO.from_record(sale)


def delete_sale(sale_id) -> bool:
    """
    Delete a sale and its items. Returns False if it did not exist.

    Stock is not restored; this removes records, it is not a return.
    """
    sale_id = parse_id(sale_id, "sale")
    with error_context("Failed to delete sale"):
        return sales_repository.delete(sale_id)
