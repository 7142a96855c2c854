"""Application lifespan event handlers.

Startup connects to MongoDB, ensures indexes, starts the geocoding client
and wires stores and services onto ``app.state``. Shutdown releases them in
reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from restaurant_reviews.clients.geocoding import GeocodingClient
from restaurant_reviews.core.config import Settings, get_settings
from restaurant_reviews.database.connection import (
    close_database_client,
    ensure_indexes,
    get_database,
    init_database_client,
)
from restaurant_reviews.database.repositories import (
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from restaurant_reviews.observability.logging import get_logger, setup_logging
from restaurant_reviews.services.ratings import RatingAggregationService
from restaurant_reviews.services.restaurants import RestaurantService
from restaurant_reviews.services.reviews import ReviewService
from restaurant_reviews.services.users import UserService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from restaurant_reviews.database.repositories.protocol import (
        RestaurantStore,
        ReviewStore,
        UserStore,
    )

logger = get_logger(__name__)


def attach_services(
    app: FastAPI,
    *,
    reviews: ReviewStore,
    restaurants: RestaurantStore,
    users: UserStore,
    geocoder: GeocodingClient | None = None,
) -> None:
    """Build the services over the given stores and store them on ``app.state``."""
    ratings = RatingAggregationService(restaurants, reviews)
    review_service = ReviewService(reviews, restaurants, users, ratings)

    app.state.review_store = reviews
    app.state.rating_service = ratings
    app.state.review_service = review_service
    app.state.restaurant_service = RestaurantService(
        restaurants, reviews, users, geocoder
    )
    app.state.user_service = UserService(users, restaurants, review_service)


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # MongoDB is critical - don't continue without it
    await init_database_client()
    database = get_database()
    await ensure_indexes(database)

    geocoder = GeocodingClient(settings.geocoding)
    await geocoder.initialize()
    app.state.geocoder = geocoder

    attach_services(
        app,
        reviews=ReviewRepository(database),
        restaurants=RestaurantRepository(database),
        users=UserRepository(database),
        geocoder=geocoder,
    )

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    geocoder: GeocodingClient | None = getattr(app.state, "geocoder", None)
    if geocoder is not None:
        await geocoder.shutdown()

    await close_database_client()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
