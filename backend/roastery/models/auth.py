from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Account that owns sales.

    password holds a bcrypt hash, never the plain text.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'customer', 'guest')", name="ck_users_role"),
        {"sqlite_autoincrement": True},
    )

    user_id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password = db.Column(db.String(255), nullable=False)
    phone_number = db.Column(db.String(32), nullable=True)
    role = db.Column(db.String(16), nullable=False, default="customer")

    def __repr__(self) -> str:
        return f"<User id={self.user_id} email={self.email!r} role={self.role!r}>"
