# Overview: External-facing transfer shapes built from repository records.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .entities import SaleRecord
from .time_utils import to_display_date
from .validation import to_money


@dataclass(frozen=True)
class SaleDTO:
    """
    Sale as the presentation layer sees it.

    Money fields are two-place Decimals and sale_date is a DD/MM/YYYY string,
    whatever the storage backend handed back.
    """
    sale_id: int
    user_id: int
    sale_date: Optional[str]
    subtotal: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    total_amount: Decimal

    @classmethod
    def from_record(cls, sale: SaleRecord) -> "SaleDTO":
        return cls(
            sale_id=sale.sale_id,
            user_id=sale.user_id,
            sale_date=to_display_date(sale.sale_date),
            subtotal=to_money(sale.subtotal),
            discount_percentage=to_money(sale.discount_percentage),
            discount_amount=to_money(sale.discount_amount),
            total_amount=to_money(sale.total_amount),
        )

    def to_dict(self) -> dict:
        return {
            "sale_id": self.sale_id,
            "user_id": self.user_id,
            "sale_date": self.sale_date,
            "subtotal": float(self.subtotal),
            "discount_percentage": float(self.discount_percentage),
            "discount_amount": float(self.discount_amount),
            "total_amount": float(self.total_amount),
        }
