"""Persistence-layer exceptions.

Repositories translate driver errors into these so that services never import
``pymongo`` to recognise a constraint violation.
"""

from __future__ import annotations


class DatabaseError(Exception):
    """Base exception for persistence errors."""


class DuplicateRecordError(DatabaseError):
    """Raised when an insert or update violates a unique index."""

    def __init__(self, collection: str, fields: tuple[str, ...] = ()) -> None:
        self.collection = collection
        self.fields = fields
        joined = ", ".join(fields) if fields else "unique key"
        super().__init__(f"Duplicate {joined} in {collection}")
