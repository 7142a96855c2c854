"""MongoDB restaurant repository."""

from __future__ import annotations

import re
from typing import Any

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from restaurant_reviews.database.connection import RESTAURANTS_COLLECTION
from restaurant_reviews.database.models import RestaurantRecord, utcnow
from restaurant_reviews.database.repositories.base import MongoRepository


def _icontains(value: str) -> dict[str, str]:
    return {"$regex": re.escape(value), "$options": "i"}


def _iexact(value: str) -> dict[str, str]:
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}


class RestaurantRepository(MongoRepository):
    """Restaurants, including the denormalized rating aggregate."""

    collection_name = RESTAURANTS_COLLECTION

    async def find_by_id(self, restaurant_id: str) -> RestaurantRecord | None:
        oid = self._oid(restaurant_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        return RestaurantRecord.from_document(document) if document else None

    async def find_by_ids(self, restaurant_ids: list[str]) -> list[RestaurantRecord]:
        oids = [oid for oid in map(self._oid, restaurant_ids) if oid is not None]
        if not oids:
            return []
        cursor = self.collection.find({"_id": {"$in": oids}})
        return [RestaurantRecord.from_document(d) for d in await cursor.to_list()]

    async def find_many(
        self,
        *,
        name_contains: str | None = None,
        cuisine_type: str | None = None,
        neighborhood: str | None = None,
        sort_by: str = "name",
        descending: bool = False,
        limit: int | None = None,
    ) -> list[RestaurantRecord]:
        query: dict[str, Any] = {}
        if name_contains:
            query["name"] = _icontains(name_contains)
        if cuisine_type:
            query["cuisine_type"] = _iexact(cuisine_type)
        if neighborhood:
            query["neighborhood"] = _iexact(neighborhood)

        direction = DESCENDING if descending else ASCENDING
        cursor = self.collection.find(query).sort([(sort_by, direction), ("_id", ASCENDING)])
        if limit:
            cursor = cursor.limit(limit)
        return [RestaurantRecord.from_document(d) for d in await cursor.to_list()]

    async def create(self, fields: dict[str, Any]) -> RestaurantRecord:
        document = {
            **fields,
            "average_rating": 0,
            "reviews_count": 0,
            "created_at": utcnow(),
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return RestaurantRecord.from_document(document)

    async def update_by_id(
        self, restaurant_id: str, fields: dict[str, Any]
    ) -> RestaurantRecord | None:
        oid = self._oid(restaurant_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return RestaurantRecord.from_document(document) if document else None

    async def delete_by_id(self, restaurant_id: str) -> RestaurantRecord | None:
        oid = self._oid(restaurant_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_delete({"_id": oid})
        return RestaurantRecord.from_document(document) if document else None
