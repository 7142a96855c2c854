"""MongoDB user repository."""

from __future__ import annotations

from typing import Any

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from restaurant_reviews.database.connection import USERS_COLLECTION
from restaurant_reviews.database.models import UserRecord, utcnow
from restaurant_reviews.database.repositories.base import MongoRepository


class UserRepository(MongoRepository):
    """Users; ``favourite_restaurants`` holds restaurant ObjectIds."""

    collection_name = USERS_COLLECTION

    async def find_by_id(self, user_id: str) -> UserRecord | None:
        oid = self._oid(user_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        return UserRecord.from_document(document) if document else None

    async def find_by_ids(self, user_ids: list[str]) -> list[UserRecord]:
        oids = [oid for oid in map(self._oid, user_ids) if oid is not None]
        if not oids:
            return []
        cursor = self.collection.find({"_id": {"$in": oids}})
        return [UserRecord.from_document(d) for d in await cursor.to_list()]

    async def find_by_email(self, email: str) -> UserRecord | None:
        document = await self.collection.find_one({"email": email.lower()})
        return UserRecord.from_document(document) if document else None

    async def find_by_username(self, username: str) -> UserRecord | None:
        document = await self.collection.find_one({"username": username})
        return UserRecord.from_document(document) if document else None

    async def find_all(self) -> list[UserRecord]:
        cursor = self.collection.find({}).sort([("created_at", ASCENDING)])
        return [UserRecord.from_document(d) for d in await cursor.to_list()]

    async def create(self, fields: dict[str, Any]) -> UserRecord:
        document = {
            "favourite_restaurants": [],
            "is_admin": False,
            **fields,
            "email": fields["email"].lower(),
            "created_at": utcnow(),
        }
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise self._duplicate(e) from e
        document["_id"] = result.inserted_id
        return UserRecord.from_document(document)

    async def update_by_id(self, user_id: str, fields: dict[str, Any]) -> UserRecord | None:
        oid = self._oid(user_id)
        if oid is None:
            return None
        try:
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise self._duplicate(e) from e
        return UserRecord.from_document(document) if document else None

    async def delete_by_id(self, user_id: str) -> UserRecord | None:
        oid = self._oid(user_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_delete({"_id": oid})
        return UserRecord.from_document(document) if document else None

    async def add_favourite(self, user_id: str, restaurant_id: str) -> UserRecord | None:
        return await self._change_favourites(user_id, "$addToSet", restaurant_id)

    async def remove_favourite(
        self, user_id: str, restaurant_id: str
    ) -> UserRecord | None:
        return await self._change_favourites(user_id, "$pull", restaurant_id)

    async def remove_favourite_everywhere(self, restaurant_id: str) -> int:
        oid = self._oid(restaurant_id)
        if oid is None:
            return 0
        result = await self.collection.update_many(
            {"favourite_restaurants": oid},
            {"$pull": {"favourite_restaurants": oid}},
        )
        return result.modified_count

    async def _change_favourites(
        self, user_id: str, operator: str, restaurant_id: str
    ) -> UserRecord | None:
        user_oid, restaurant_oid = self._oid(user_id), self._oid(restaurant_id)
        if user_oid is None or restaurant_oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": user_oid},
            {operator: {"favourite_restaurants": restaurant_oid}},
            return_document=ReturnDocument.AFTER,
        )
        return UserRecord.from_document(document) if document else None
