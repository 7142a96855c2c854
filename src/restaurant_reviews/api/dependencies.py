"""FastAPI dependencies for service access.

Services and stores are built during application startup and stored in
``app.state``; tests replace them with instances wired to in-memory stores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import Request

from restaurant_reviews.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from restaurant_reviews.database.repositories.protocol import ReviewStore
    from restaurant_reviews.services.restaurants.service import RestaurantService
    from restaurant_reviews.services.reviews.service import ReviewService
    from restaurant_reviews.services.users.service import UserService


def _from_state(request: Request, name: str, label: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ServiceUnavailableException(f"{label} not available")
    return value


async def get_review_store(request: Request) -> ReviewStore:
    """Get the review store used to resolve review ownership."""
    return _from_state(request, "review_store", "Review store")


async def get_review_service(request: Request) -> ReviewService:
    """Get the review service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    return _from_state(request, "review_service", "Review service")


async def get_restaurant_service(request: Request) -> RestaurantService:
    """Get the restaurant service from app state."""
    return _from_state(request, "restaurant_service", "Restaurant service")


async def get_user_service(request: Request) -> UserService:
    """Get the user service from app state."""
    return _from_state(request, "user_service", "User service")
