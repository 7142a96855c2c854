"""Exceptions for the restaurant service."""

from __future__ import annotations

from restaurant_reviews.services.exceptions import InvalidInputError, NotFoundError


class RestaurantNotFoundError(NotFoundError):
    """Raised when the restaurant does not exist."""

    def __init__(self, restaurant_id: str) -> None:
        self.restaurant_id = restaurant_id
        super().__init__("Restaurant not found")


class InvalidRestaurantError(InvalidInputError):
    """Raised for a malformed id or an address that cannot be geocoded."""
