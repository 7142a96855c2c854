"""Review lifecycle."""

from restaurant_reviews.services.reviews.exceptions import (
    DuplicateReviewError,
    InvalidReviewError,
    ReviewedRestaurantNotFoundError,
    ReviewerNotFoundError,
    ReviewNotFoundError,
)
from restaurant_reviews.services.reviews.service import ReviewService, validate_rating


__all__ = [
    "DuplicateReviewError",
    "InvalidReviewError",
    "ReviewNotFoundError",
    "ReviewService",
    "ReviewedRestaurantNotFoundError",
    "ReviewerNotFoundError",
    "validate_rating",
]
