"""Unit tests for the MongoDB repositories with a mocked collection.

Tests cover:
- Malformed ids never reaching the driver
- Unique index violations translated to DuplicateRecordError
- Rating fields zeroed on restaurant creation
- Favourites updates using set semantics
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from restaurant_reviews.database.exceptions import DuplicateRecordError
from restaurant_reviews.database.repositories import (
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from tests.fixtures.stores import restaurant_fields


pytestmark = pytest.mark.unit


@pytest.fixture
def collection() -> MagicMock:
    mock = MagicMock()
    mock.find_one = AsyncMock(return_value=None)
    mock.insert_one = AsyncMock()
    mock.find_one_and_update = AsyncMock(return_value=None)
    mock.update_one = AsyncMock()
    return mock


@pytest.fixture
def database(collection) -> MagicMock:
    mock = MagicMock()
    mock.__getitem__.return_value = collection
    return mock


class TestReviewRepository:
    """Tests for ReviewRepository."""

    async def test_malformed_id_skips_query(self, database, collection):
        """Should return None without querying."""
        assert await ReviewRepository(database).find_by_id("nope") is None

        collection.find_one.assert_not_awaited()

    async def test_duplicate_insert(self, database, collection):
        """Should translate DuplicateKeyError."""
        collection.insert_one.side_effect = DuplicateKeyError(
            "E11000", 11000, {"keyPattern": {"user": 1, "restaurant": 1}}
        )

        with pytest.raises(DuplicateRecordError) as exc_info:
            await ReviewRepository(database).create(
                {"user": str(ObjectId()), "restaurant": str(ObjectId()), "rating": 4}
            )

        assert exc_info.value.fields == ("user", "restaurant")

    async def test_create_stores_object_ids(self, database, collection):
        """Should store references as ObjectIds and return hex strings."""
        user_id, restaurant_id = str(ObjectId()), str(ObjectId())
        collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        record = await ReviewRepository(database).create(
            {"user": user_id, "restaurant": restaurant_id, "rating": 5}
        )

        document = collection.insert_one.await_args.args[0]
        assert document["user"] == ObjectId(user_id)
        assert record.user == user_id
        assert record.review == ""


class TestRestaurantRepository:
    """Tests for RestaurantRepository."""

    async def test_create_zeroes_rating(self, database, collection):
        """Should ignore rating values supplied by the caller."""
        collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        record = await RestaurantRepository(database).create(
            restaurant_fields(average_rating=5, reviews_count=3)
        )

        document = collection.insert_one.await_args.args[0]
        assert (document["average_rating"], document["reviews_count"]) == (0, 0)
        assert (record.average_rating, record.reviews_count) == (0, 0)


class TestUserRepository:
    """Tests for UserRepository."""

    async def test_find_by_email_lowercases(self, database, collection):
        """Should query with the lowercased email."""
        await UserRepository(database).find_by_email("Alice@Example.COM")

        collection.find_one.assert_awaited_once_with({"email": "alice@example.com"})

    async def test_add_favourite_uses_add_to_set(self, database, collection):
        """Should never duplicate a favourite."""
        user_id, restaurant_id = str(ObjectId()), str(ObjectId())

        await UserRepository(database).add_favourite(user_id, restaurant_id)

        update = collection.find_one_and_update.await_args.args[1]
        assert update == {"$addToSet": {"favourite_restaurants": ObjectId(restaurant_id)}}
