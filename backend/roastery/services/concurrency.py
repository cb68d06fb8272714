# Overview: Transaction scope and row locking for multi-row writes.

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from ..extensions import db
from ..models import Inventory


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE; TransactionScope takes the
    database write lock up front there instead.
    """
    return query.with_for_update()


class TransactionScope:
    """
    One all-or-nothing unit of work on the request's session.

    Use as a context manager. Leaving the block normally commits; leaving it
    with an exception rolls back every change made inside it and re-raises.
    Either way the session's connection goes back to the pool, so a failure
    halfway through a workflow never leaves locks held.

        with TransactionScope() as tx:
            inv = tx.lock_inventory(product_id)
            ...

    Repository writes made inside the block must pass commit=False.
    """

    def __init__(self, session=None, *, action: str = "Transaction failed"):
        self.session = session or db.session
        self.action = action
        self._closed = False

    def __enter__(self) -> "TransactionScope":
        try:
            if self.session.get_bind().dialect.name == "sqlite":
                # SQLite has no row locks: serialize writers for the whole scope
                self.session.execute(text("BEGIN IMMEDIATE"))
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"{self.action}: {exc}", cause=exc) from exc
        return self

    def lock_inventory(self, product_id: int) -> Inventory | None:
        """
        SELECT ... FOR UPDATE the inventory row of one product.

        Concurrent scopes locking the same product wait here until the holder
        commits or rolls back; different products do not contend.
        """
        try:
            return lock_for_update(
                self.session.query(Inventory)
                .filter(Inventory.product_id == product_id)
                .populate_existing()
            ).first()
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.action}: {exc}", cause=exc) from exc

    def commit(self) -> None:
        if self._closed:
            return
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.rollback()
            raise StorageError(f"{self.action}: {exc}", cause=exc) from exc
        self._closed = True

    def rollback(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.session.rollback()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.rollback()
            if isinstance(exc, SQLAlchemyError):
                raise StorageError(f"{self.action}: {exc}", cause=exc) from exc
            return False
        self.commit()
        return False
