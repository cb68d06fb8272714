# Overview: Sale total arithmetic. The only place discount and total are derived.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from ..validation import CENTS

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SaleTotals:
    subtotal: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    total_amount: Decimal


def calculate_totals(subtotal: Decimal, discount_percentage: Decimal) -> SaleTotals:
    """
    discount_amount = round(subtotal * pct / 100, 2) (half-up)
    total_amount    = subtotal - discount_amount

    The three derived values always come from one call so they can never
    drift apart.
    """
    subtotal = Decimal(subtotal).quantize(CENTS, rounding=ROUND_HALF_UP)
    pct = Decimal(discount_percentage)
    discount_amount = (subtotal * pct / HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)
    return SaleTotals(
        subtotal=subtotal,
        discount_percentage=pct,
        discount_amount=discount_amount,
        total_amount=subtotal - discount_amount,
    )


def line_subtotal(price_at_sale: Decimal, quantity: int) -> Decimal:
    return Decimal(price_at_sale) * int(quantity)
