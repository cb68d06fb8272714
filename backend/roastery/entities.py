# Overview: Typed records the repositories hand back instead of ORM rows.

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .time_utils import to_display_date
from .validation import to_money


@dataclass(frozen=True)
class ProductRecord:
    product_id: int
    product_name: str
    description: Optional[str]
    unit_price: Decimal
    product_type: str
    status: str

    @classmethod
    def from_model(cls, p) -> "ProductRecord":
        return cls(
            product_id=p.product_id,
            product_name=p.product_name,
            description=p.description,
            unit_price=to_money(p.unit_price),
            product_type=p.product_type,
            status=p.status,
        )

    @property
    def is_available(self) -> bool:
        return self.status == "available"

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "description": self.description,
            "unit_price": float(self.unit_price),
            "product_type": self.product_type,
            "status": self.status,
        }


@dataclass(frozen=True)
class ProductUpdate:
    """
    Partial product update. Only fields that are not None are written.

    Build one with from_dict() so unknown keys are dropped.
    """
    product_name: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[Decimal] = None
    product_type: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ProductUpdate":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True)
class InventoryRecord:
    inventory_id: int
    product_id: int
    quantity_in_stock: int
    last_updated: Optional[datetime]

    @classmethod
    def from_model(cls, inv) -> "InventoryRecord":
        return cls(
            inventory_id=inv.inventory_id,
            product_id=inv.product_id,
            quantity_in_stock=int(inv.quantity_in_stock),
            last_updated=inv.last_updated,
        )

    def to_dict(self) -> dict:
        return {
            "inventory_id": self.inventory_id,
            "product_id": self.product_id,
            "quantity_in_stock": self.quantity_in_stock,
            "last_updated": to_display_date(self.last_updated),
        }


@dataclass(frozen=True)
class InventoryDetail:
    """Inventory row joined with the product fields shown next to it."""
    inventory_id: int
    product_id: int
    quantity_in_stock: int
    last_updated: Optional[datetime]
    product_name: str
    unit_price: Decimal
    product_type: str
    status: str

    @classmethod
    def from_row(cls, inv, product) -> "InventoryDetail":
        return cls(
            inventory_id=inv.inventory_id,
            product_id=inv.product_id,
            quantity_in_stock=int(inv.quantity_in_stock),
            last_updated=inv.last_updated,
            product_name=product.product_name,
            unit_price=to_money(product.unit_price),
            product_type=product.product_type,
            status=product.status,
        )

    def to_dict(self) -> dict:
        return {
            "inventory_id": self.inventory_id,
            "product_id": self.product_id,
            "quantity_in_stock": self.quantity_in_stock,
            "last_updated": to_display_date(self.last_updated),
            "product_name": self.product_name,
            "unit_price": float(self.unit_price),
            "product_type": self.product_type,
            "status": self.status,
        }


@dataclass(frozen=True)
class SaleRecord:
    sale_id: int
    user_id: int
    sale_date: Optional[datetime]
    subtotal: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    total_amount: Decimal

    @classmethod
    def from_model(cls, s) -> "SaleRecord":
        return cls(
            sale_id=s.sale_id,
            user_id=s.user_id,
            sale_date=s.sale_date,
            subtotal=to_money(s.subtotal),
            discount_percentage=to_money(s.discount_percentage),
            discount_amount=to_money(s.discount_amount),
            total_amount=to_money(s.total_amount),
        )


@dataclass(frozen=True)
class SaleItemRecord:
    sale_item_id: int
    sale_id: int
    product_id: int
    quantity: int
    price_at_sale: Decimal

    @classmethod
    def from_model(cls, item) -> "SaleItemRecord":
        return cls(
            sale_item_id=item.sale_item_id,
            sale_id=item.sale_id,
            product_id=item.product_id,
            quantity=int(item.quantity),
            price_at_sale=to_money(item.price_at_sale),
        )

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price_at_sale * self.quantity)

    def to_dict(self) -> dict:
        return {
            "sale_item_id": self.sale_item_id,
            "sale_id": self.sale_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price_at_sale": float(self.price_at_sale),
            "line_total": float(self.line_total),
        }


@dataclass(frozen=True)
class UserRecord:
    user_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str]
    role: str
    # bcrypt hash; excluded from to_dict()
    password: str = field(repr=False)

    @classmethod
    def from_model(cls, u) -> "UserRecord":
        return cls(
            user_id=u.user_id,
            first_name=u.first_name,
            last_name=u.last_name,
            email=u.email,
            phone_number=u.phone_number,
            role=u.role,
            password=u.password,
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone_number": self.phone_number,
            "role": self.role,
        }
