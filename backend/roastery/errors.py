# Overview: Domain error taxonomy shared by repositories, services and routes.

"""
Error kinds

Every error raised by the core carries an ErrorKind tag so callers branch on
the kind instead of matching message text.

- VALIDATION: bad or missing input, raised before storage is touched
- NOT_FOUND: a referenced entity does not exist
- INSUFFICIENT_STOCK: requested quantity exceeds what is in stock
- CONFLICT: a uniqueness rule would be broken (duplicate email, second inventory row)
- STORAGE: the database layer failed; the original exception is kept on `cause`
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CONFLICT = "conflict"
    STORAGE = "storage"


class StoreError(Exception):
    """Base class for every error the back office raises on purpose."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(StoreError, ValueError):
    """400-level input problem."""

    kind = ErrorKind.VALIDATION


class NotFoundError(StoreError):
    """404-level: the referenced entity is absent."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(StoreError):
    """409-level business rule conflict (e.g., duplicate email)."""

    kind = ErrorKind.CONFLICT


class InsufficientStockError(StoreError):
    """Requested quantity exceeds the locked quantity in stock."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_id: int, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Available: {available}, Requested: {requested}",
            details={
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class StorageError(StoreError):
    """Wraps any underlying data-access failure."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


# Repositories historically raised "RepositoryError"; both names refer to the same class.
RepositoryError = StorageError


@contextmanager
def error_context(action: str) -> Iterator[None]:
    """
    Prefix storage failures raised inside the block with the operation name.

    Only StorageError is rewrapped; validation, not-found and stock errors
    already describe themselves and pass through untouched.
    """
    try:
        yield
    except StorageError as exc:
        raise StorageError(f"{action}: {exc.message}", cause=exc.cause) from exc
