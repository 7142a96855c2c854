"""MongoDB review repository."""

from __future__ import annotations

from typing import Any

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from restaurant_reviews.database.connection import REVIEWS_COLLECTION
from restaurant_reviews.database.models import ReviewRecord, utcnow
from restaurant_reviews.database.repositories.base import MongoRepository
from restaurant_reviews.observability.logging import get_logger


logger = get_logger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING)]


class ReviewRepository(MongoRepository):
    """Reviews keyed by ``(user, restaurant)`` with ObjectId references."""

    collection_name = REVIEWS_COLLECTION

    async def find_one(self, user_id: str, restaurant_id: str) -> ReviewRecord | None:
        user_oid, restaurant_oid = self._oid(user_id), self._oid(restaurant_id)
        if user_oid is None or restaurant_oid is None:
            return None
        document = await self.collection.find_one(
            {"user": user_oid, "restaurant": restaurant_oid}
        )
        return ReviewRecord.from_document(document) if document else None

    async def find_by_id(self, review_id: str) -> ReviewRecord | None:
        oid = self._oid(review_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        return ReviewRecord.from_document(document) if document else None

    async def find_all_for_restaurant(self, restaurant_id: str) -> list[ReviewRecord]:
        oid = self._oid(restaurant_id)
        if oid is None:
            return []
        cursor = self.collection.find({"restaurant": oid}).sort(_NEWEST_FIRST)
        return [ReviewRecord.from_document(d) for d in await cursor.to_list()]

    async def find_all_for_user(self, user_id: str) -> list[ReviewRecord]:
        oid = self._oid(user_id)
        if oid is None:
            return []
        cursor = self.collection.find({"user": oid}).sort(_NEWEST_FIRST)
        return [ReviewRecord.from_document(d) for d in await cursor.to_list()]

    async def create(self, fields: dict[str, Any]) -> ReviewRecord:
        now = utcnow()
        document = {
            "user": self._oid(fields["user"]),
            "restaurant": self._oid(fields["restaurant"]),
            "rating": fields["rating"],
            "review": fields.get("review", ""),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise self._duplicate(e) from e
        document["_id"] = result.inserted_id
        return ReviewRecord.from_document(document)

    async def update_by_id(
        self, review_id: str, fields: dict[str, Any]
    ) -> ReviewRecord | None:
        oid = self._oid(review_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return ReviewRecord.from_document(document) if document else None

    async def delete_by_id(self, review_id: str) -> ReviewRecord | None:
        oid = self._oid(review_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_delete({"_id": oid})
        return ReviewRecord.from_document(document) if document else None

    async def delete_all_for_user(self, user_id: str) -> int:
        oid = self._oid(user_id)
        if oid is None:
            return 0
        result = await self.collection.delete_many({"user": oid})
        logger.debug("Deleted reviews for user", user_id=user_id, count=result.deleted_count)
        return result.deleted_count

    async def delete_all_for_restaurant(self, restaurant_id: str) -> int:
        oid = self._oid(restaurant_id)
        if oid is None:
            return 0
        result = await self.collection.delete_many({"restaurant": oid})
        logger.debug(
            "Deleted reviews for restaurant",
            restaurant_id=restaurant_id,
            count=result.deleted_count,
        )
        return result.deleted_count
