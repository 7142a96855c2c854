"""Restaurant rating aggregation."""

from restaurant_reviews.services.ratings.exceptions import RestaurantNotFoundError
from restaurant_reviews.services.ratings.service import (
    RatingAggregationService,
    RatingSummary,
    compute_average,
)


__all__ = [
    "RatingAggregationService",
    "RatingSummary",
    "RestaurantNotFoundError",
    "compute_average",
]
