"""Unit test configuration.

Unit tests are fast and isolated: services run over the in-memory stores in
``tests/fixtures/stores.py`` and the API is exercised through an ASGI
transport without starting the lifespan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from restaurant_reviews.cache.rate_limit import limiter
from restaurant_reviews.core.events import attach_services
from restaurant_reviews.factory import create_app
from restaurant_reviews.services.ratings import RatingAggregationService
from restaurant_reviews.services.restaurants import RestaurantService
from restaurant_reviews.services.reviews import ReviewService
from restaurant_reviews.services.users import UserService
from tests.fixtures.stores import (
    InMemoryRestaurantStore,
    InMemoryReviewStore,
    InMemoryUserStore,
    restaurant_fields,
    user_fields,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from restaurant_reviews.database.models import RestaurantRecord, UserRecord


pytestmark = pytest.mark.unit


# =============================================================================
# Stores and services
# =============================================================================


@pytest.fixture
def review_store() -> InMemoryReviewStore:
    return InMemoryReviewStore()


@pytest.fixture
def restaurant_store() -> InMemoryRestaurantStore:
    return InMemoryRestaurantStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def rating_service(
    restaurant_store: InMemoryRestaurantStore,
    review_store: InMemoryReviewStore,
) -> RatingAggregationService:
    return RatingAggregationService(restaurant_store, review_store)


@pytest.fixture
def review_service(
    review_store: InMemoryReviewStore,
    restaurant_store: InMemoryRestaurantStore,
    user_store: InMemoryUserStore,
    rating_service: RatingAggregationService,
) -> ReviewService:
    return ReviewService(review_store, restaurant_store, user_store, rating_service)


@pytest.fixture
def restaurant_service(
    restaurant_store: InMemoryRestaurantStore,
    review_store: InMemoryReviewStore,
    user_store: InMemoryUserStore,
) -> RestaurantService:
    return RestaurantService(restaurant_store, review_store, user_store)


@pytest.fixture
def user_service(
    user_store: InMemoryUserStore,
    restaurant_store: InMemoryRestaurantStore,
    review_service: ReviewService,
) -> UserService:
    return UserService(user_store, restaurant_store, review_service)


# =============================================================================
# Seed data
# =============================================================================


@pytest.fixture
async def restaurant(restaurant_store: InMemoryRestaurantStore) -> RestaurantRecord:
    return await restaurant_store.create(restaurant_fields())


@pytest.fixture
async def alice(user_store: InMemoryUserStore) -> UserRecord:
    return await user_store.create(user_fields("alice"))


@pytest.fixture
async def bob(user_store: InMemoryUserStore) -> UserRecord:
    return await user_store.create(user_fields("bob"))


@pytest.fixture
async def admin(user_store: InMemoryUserStore) -> UserRecord:
    return await user_store.create(user_fields("root", is_admin=True))


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def app(
    review_store: InMemoryReviewStore,
    restaurant_store: InMemoryRestaurantStore,
    user_store: InMemoryUserStore,
) -> FastAPI:
    """Application wired to the in-memory stores."""
    application = create_app()
    attach_services(
        application,
        reviews=review_store,
        restaurants=restaurant_store,
        users=user_store,
    )
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    limiter.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test/api/v1"
    ) as http:
        yield http

