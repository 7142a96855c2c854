"""Integration test fixtures.

Provides a real MongoDB through testcontainers. Each test gets its own
database with the production indexes, dropped afterwards.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest
from pymongo import AsyncMongoClient
from testcontainers.mongodb import MongoDbContainer

from restaurant_reviews.database.connection import ensure_indexes
from restaurant_reviews.database.repositories import (
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from restaurant_reviews.services.ratings import RatingAggregationService
from restaurant_reviews.services.reviews import ReviewService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from pymongo.asynchronous.database import AsyncDatabase


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def mongo_container() -> Generator[MongoDbContainer]:
    """Start a MongoDB container for the test session."""
    with MongoDbContainer("mongo:7") as mongo:
        yield mongo


@pytest.fixture
async def database(mongo_container: MongoDbContainer) -> AsyncGenerator[AsyncDatabase]:
    """A fresh database with indexes for one test."""
    client: AsyncMongoClient = AsyncMongoClient(
        mongo_container.get_connection_url(), tz_aware=True
    )
    name = f"test_{uuid.uuid4().hex[:12]}"
    db = client[name]
    await ensure_indexes(db)
    try:
        yield db
    finally:
        await client.drop_database(name)
        await client.close()


@pytest.fixture
def reviews(database: AsyncDatabase) -> ReviewRepository:
    return ReviewRepository(database)


@pytest.fixture
def restaurants(database: AsyncDatabase) -> RestaurantRepository:
    return RestaurantRepository(database)


@pytest.fixture
def users(database: AsyncDatabase) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def review_service(
    reviews: ReviewRepository,
    restaurants: RestaurantRepository,
    users: UserRepository,
) -> ReviewService:
    ratings = RatingAggregationService(restaurants, reviews)
    return ReviewService(reviews, restaurants, users, ratings)
