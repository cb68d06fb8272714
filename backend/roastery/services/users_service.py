# Overview: Service-layer operations for user accounts; registration, credential checks and lookups.

"""
Users Service

Users matter to the back office as the owners of sales. This module is the
user-lookup collaborator the sale workflow calls, plus registration and
credential checking. Sessions and cookies belong to the web layer.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 8 characters required
- authenticate() answers the same message for unknown email and bad password
"""

from __future__ import annotations

import re

import bcrypt

from ..entities import UserRecord
from ..errors import ConflictError, ValidationError, error_context
from ..repositories import users_repository
from ..validation import USER_ROLES, parse_choice, parse_id, require_fields

USER_REQUIRED_FIELDS = ("first_name", "last_name", "email", "password")
SELF_SERVICE_ROLES = ("customer", "guest")
MIN_PASSWORD_LENGTH = 8

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def hash_password(password: str) -> str:
    """Hash password using bcrypt with cost factor 12."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns True if password matches hash, False otherwise (including
    malformed hashes).
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def register_user(data: dict, *, allow_admin: bool = False) -> UserRecord:
    """
    Create a user account.

    Self-service registration may only produce 'customer' or 'guest' users;
    anything else requested falls back to 'customer'. Pass allow_admin=True
    from trusted code paths to create administrators.

    Raises:
        ValidationError: missing fields, malformed email, weak password
        ConflictError: email already registered
    """
    data = data or {}
    require_fields(data, USER_REQUIRED_FIELDS)

    email = str(data["email"]).strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")

    requested_role = str(data.get("role") or "customer").strip()
    if allow_admin:
        role = parse_choice(requested_role, "role", USER_ROLES)
    else:
        role = requested_role if requested_role in SELF_SERVICE_ROLES else "customer"

    password_hash = hash_password(str(data["password"]))

    with error_context("Failed to register user"):
        if users_repository.find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        phone = data.get("phone_number")
        return users_repository.create(
            first_name=str(data["first_name"]).strip(),
            last_name=str(data["last_name"]).strip(),
            email=email,
            password_hash=password_hash,
            role=role,
            phone_number=str(phone).strip() if phone else None,
        )


def authenticate(email, password) -> UserRecord:
    """Return the user whose credentials match, or raise ValidationError."""
    if not email or not password:
        raise ValidationError("Email and password are required")

    with error_context("Failed to log in"):
        user = users_repository.find_by_email(str(email).strip().lower())

    if user is None or not verify_password(str(password), user.password):
        raise ValidationError("Invalid email or password")
    return user


def get_user_by_id(user_id) -> UserRecord | None:
    user_id = parse_id(user_id, "user")
    with error_context("Failed to get user"):
        return users_repository.find_by_id(user_id)


def list_users() -> list[UserRecord]:
    with error_context("Failed to list users"):
        return users_repository.find_all()
