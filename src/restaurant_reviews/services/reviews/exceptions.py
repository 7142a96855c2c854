"""Exceptions for the review lifecycle service."""

from __future__ import annotations

from restaurant_reviews.services.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
)


class InvalidReviewError(InvalidInputError):
    """Raised for an out-of-range rating or a malformed restaurant id."""


class ReviewNotFoundError(NotFoundError):
    """Raised when the review does not exist."""

    def __init__(self, review_id: str) -> None:
        self.review_id = review_id
        super().__init__("Review not found")


class ReviewedRestaurantNotFoundError(NotFoundError):
    """Raised when creating a review for a restaurant that does not exist."""

    def __init__(self, restaurant_id: str) -> None:
        self.restaurant_id = restaurant_id
        super().__init__("Restaurant not found")


class ReviewerNotFoundError(NotFoundError):
    """Raised when the reviewing user no longer exists."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__("User not found")


class DuplicateReviewError(ConflictError):
    """Raised when the user already reviewed the restaurant."""

    def __init__(self) -> None:
        super().__init__("User has already reviewed this restaurant")
