# Overview: Shared plumbing for the repositories; turns SQLAlchemy faults into StorageError.

from __future__ import annotations

from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from ..extensions import db


def wraps_storage_errors(message: str):
    """
    Decorate a repository function so any SQLAlchemyError it raises is
    rolled back and re-raised as StorageError("<message>: <original>").

    The original exception stays reachable through StorageError.cause and
    the exception chain.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise StorageError(f"{message}: {exc}", cause=exc) from exc
        return wrapper
    return decorator


def finish(commit: bool) -> None:
    """Commit, or only flush when the caller owns the transaction."""
    if commit:
        db.session.commit()
    else:
        db.session.flush()
