# Overview: Service-layer reads for sale line items.

from __future__ import annotations

from ..entities import SaleItemRecord
from ..errors import error_context
from ..repositories import sale_items_repository
from ..validation import parse_id


def get_sale_items_by_sale_id(sale_id) -> list[SaleItemRecord]:
    sale_id = parse_id(sale_id, "sale")
    with error_context("Failed to get sale items"):
        return sale_items_repository.find_by_sale_id(sale_id)


def get_sale_item_by_id(sale_item_id) -> SaleItemRecord | None:
    sale_item_id = parse_id(sale_item_id, "sale item")
    with error_context("Failed to get sale item"):
        return sale_items_repository.find_by_id(sale_item_id)
