"""MongoDB client management.

This module provides:
- Async client lifecycle management via lifespan events
- Index creation for the uniqueness constraints the services rely on
- Health check utilities
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError

from restaurant_reviews.core.config import get_settings
from restaurant_reviews.observability.logging import get_logger


if TYPE_CHECKING:
    from pymongo.asynchronous.database import AsyncDatabase

logger = get_logger(__name__)

USERS_COLLECTION = "users"
RESTAURANTS_COLLECTION = "restaurants"
REVIEWS_COLLECTION = "reviews"

# Global client
_client: AsyncMongoClient | None = None


async def init_database_client() -> None:
    """Initialize the MongoDB client and verify connectivity.

    Should be called during application startup (lifespan).
    """
    global _client  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing MongoDB client",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
    )

    _client = AsyncMongoClient(
        settings.database_url,
        serverSelectionTimeoutMS=settings.database.server_selection_timeout_ms,
        maxPoolSize=settings.database.max_pool_size,
        tz_aware=True,
    )

    try:
        await _client.admin.command("ping")
        logger.info("MongoDB connection established successfully")
    except PyMongoError:
        logger.exception("Failed to connect to MongoDB")
        raise


async def close_database_client() -> None:
    """Close the MongoDB client.

    Should be called during application shutdown (lifespan).
    """
    global _client  # noqa: PLW0603

    logger.info("Closing MongoDB client")

    if _client:
        await _client.close()
        _client = None

    logger.info("MongoDB client closed")


def get_database() -> AsyncDatabase:
    """Get the application database.

    Raises:
        RuntimeError: If the client is not initialized.
    """
    if _client is None:
        msg = "Database client not initialized. Call init_database_client() first."
        raise RuntimeError(msg)
    return _client[get_settings().database.name]


async def ensure_indexes(database: AsyncDatabase | None = None) -> None:
    """Create the indexes backing uniqueness and the common lookups.

    ``reviews(user, restaurant)`` is the hard guarantee of one review per
    user per restaurant; the service-level pre-check only gives a nicer
    error on the common path.
    """
    db = database if database is not None else get_database()

    await db[USERS_COLLECTION].create_index([("username", ASCENDING)], unique=True)
    await db[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True)
    await db[REVIEWS_COLLECTION].create_index(
        [("user", ASCENDING), ("restaurant", ASCENDING)],
        unique=True,
        name="user_restaurant_unique",
    )
    await db[REVIEWS_COLLECTION].create_index(
        [("restaurant", ASCENDING), ("created_at", DESCENDING)]
    )
    await db[RESTAURANTS_COLLECTION].create_index([("name", ASCENDING)])
    await db[RESTAURANTS_COLLECTION].create_index([("average_rating", DESCENDING)])

    logger.info("MongoDB indexes ensured")


async def check_database_health() -> dict[str, str]:
    """Check health of the MongoDB connection."""
    results: dict[str, str] = {}

    try:
        if _client:
            await _client.admin.command("ping")
            results["database"] = "healthy"
        else:
            results["database"] = "not_initialized"
    except PyMongoError:
        results["database"] = "unhealthy"

    return results
