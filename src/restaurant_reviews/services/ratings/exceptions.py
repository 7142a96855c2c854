"""Exceptions for the rating aggregation service."""

from __future__ import annotations

from restaurant_reviews.services.exceptions import NotFoundError


class RestaurantNotFoundError(NotFoundError):
    """Raised when recomputing the rating of a restaurant that does not exist."""

    def __init__(self, restaurant_id: str) -> None:
        self.restaurant_id = restaurant_id
        super().__init__("Restaurant not found")
