"""Shared plumbing for the MongoDB repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bson import ObjectId

from restaurant_reviews.database.connection import get_database
from restaurant_reviews.database.exceptions import DuplicateRecordError
from restaurant_reviews.database.identifiers import is_valid_object_id


if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase
    from pymongo.errors import DuplicateKeyError


class MongoRepository:
    """Base class binding a repository to one collection.

    Args:
        database: Database handle. If None, uses the global client.
    """

    collection_name: str

    def __init__(self, database: AsyncDatabase | None = None) -> None:
        self._database = database

    @property
    def collection(self) -> AsyncCollection:
        database = self._database if self._database is not None else get_database()
        return database[self.collection_name]

    @staticmethod
    def _oid(value: str) -> ObjectId | None:
        """ObjectId for ``value``, or None when it cannot match any document."""
        if not is_valid_object_id(value):
            return None
        return ObjectId(value)

    def _duplicate(self, exc: DuplicateKeyError) -> DuplicateRecordError:
        key_pattern: dict[str, Any] = (exc.details or {}).get("keyPattern") or {}
        return DuplicateRecordError(self.collection_name, tuple(key_pattern))
