from __future__ import annotations

from ..extensions import db
from roastery.time_utils import utcnow


class Sale(db.Model):
    """
    Sale header.

    Created with all money fields at zero, then finalized once its items are
    known. subtotal, discount_percentage, discount_amount and total_amount are
    always written together (see services.pricing.calculate_totals).
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_sales_discount_range",
        ),
        db.Index("ix_sales_user_date", "user_id", "sale_date"),
        {"sqlite_autoincrement": True},
    )

    sale_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.user_id"), nullable=False, index=True)
    sale_date = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
        index=True,
    )

    subtotal = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    discount_percentage = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    discount_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    items = db.relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.sale_item_id",
    )
    user = db.relationship("User", backref=db.backref("sales", lazy=True))

    def __repr__(self) -> str:
        return f"<Sale id={self.sale_id} user_id={self.user_id} total={self.total_amount}>"


class SaleItem(db.Model):
    """Line item on a sale. Immutable once created."""
    __tablename__ = "sale_items"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_sale_items_qty_positive"),
        db.CheckConstraint("price_at_sale >= 0", name="ck_sale_items_price_nonneg"),
        {"sqlite_autoincrement": True},
    )

    sale_item_id = db.Column(db.Integer, primary_key=True)
    sale_id = db.Column(
        db.Integer,
        db.ForeignKey("sales.sale_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = db.Column(db.Integer, db.ForeignKey("products.product_id"), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    # Unit price captured at checkout; decoupled from products.unit_price
    price_at_sale = db.Column(db.Numeric(10, 2), nullable=False)

    sale = db.relationship("Sale", back_populates="items")
    product = db.relationship("Product")

    def __repr__(self) -> str:
        return f"<SaleItem id={self.sale_item_id} sale_id={self.sale_id} product_id={self.product_id}>"
