# Overview: Data access for user accounts (sale owners).

from __future__ import annotations

from ..entities import UserRecord
from ..extensions import db
from ..models import User
from .base import finish, wraps_storage_errors


@wraps_storage_errors("Failed to create user")
def create(
    *,
    first_name: str,
    last_name: str,
    email: str,
    password_hash: str,
    role: str,
    phone_number: str | None = None,
    commit: bool = True,
) -> UserRecord:
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password_hash,
        phone_number=phone_number,
        role=role,
    )
    db.session.add(user)
    finish(commit)
    return UserRecord.from_model(user)


@wraps_storage_errors("Failed to retrieve users")
def find_all() -> list[UserRecord]:
    rows = db.session.query(User).order_by(User.user_id.desc()).all()
    return [UserRecord.from_model(u) for u in rows]


@wraps_storage_errors("Failed to find user by ID")
def find_by_id(user_id: int) -> UserRecord | None:
    user = db.session.get(User, user_id)
    return UserRecord.from_model(user) if user else None


@wraps_storage_errors("Failed to find user by email")
def find_by_email(email: str) -> UserRecord | None:
    user = db.session.query(User).filter(User.email == email).first()
    return UserRecord.from_model(user) if user else None
