from __future__ import annotations

from ..extensions import db
from roastery.time_utils import utcnow


class Product(db.Model):
    """
    Product master data.

    unit_price is the live price. Sales never read it back: each sale item
    snapshots its own price_at_sale.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("status IN ('available', 'not available')", name="ck_products_status"),
        db.CheckConstraint("unit_price >= 0", name="ck_products_unit_price_nonneg"),
        db.Index("ix_products_status", "status"),
        {"sqlite_autoincrement": True},
    )

    product_id = db.Column(db.Integer, primary_key=True)
    product_name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    product_type = db.Column(db.String(64), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="available")

    # ORM cascade so the stock row goes with the product on every backend
    inventory = db.relationship(
        "Inventory", back_populates="product", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Product id={self.product_id} name={self.product_name!r} status={self.status!r}>"


class Inventory(db.Model):
    """
    Stock on hand, one row per product.

    INVARIANT: quantity_in_stock never drops below zero in a committed state.
    Sale fulfillment locks this row (SELECT ... FOR UPDATE) before decrementing.
    """
    __tablename__ = "inventory"
    __table_args__ = (
        db.CheckConstraint("quantity_in_stock >= 0", name="ck_inventory_qty_nonneg"),
        db.Index("ix_inventory_quantity", "quantity_in_stock"),
        {"sqlite_autoincrement": True},
    )

    inventory_id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.product_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    quantity_in_stock = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
    )

    product = db.relationship("Product", back_populates="inventory")

    def __repr__(self) -> str:
        return f"<Inventory product_id={self.product_id} qty={self.quantity_in_stock}>"
