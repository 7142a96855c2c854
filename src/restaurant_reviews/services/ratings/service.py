"""Rating aggregation service.

Keeps ``average_rating`` and ``reviews_count`` of a restaurant equal to the
aggregate of its persisted reviews. Every recomputation reads the complete
review set and overwrites both fields in one write, so running it again
converges to the same values regardless of what happened in between.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel

from restaurant_reviews.observability.logging import get_logger
from restaurant_reviews.observability.metrics import record_rating_recomputation
from restaurant_reviews.services.ratings.exceptions import RestaurantNotFoundError


if TYPE_CHECKING:
    from collections.abc import Iterable

    from restaurant_reviews.database.repositories.protocol import (
        RestaurantStore,
        ReviewStore,
    )

logger = get_logger(__name__)

_TWO_PLACES = Decimal("0.01")


class RatingSummary(BaseModel):
    """Aggregate written back to a restaurant."""

    restaurant_id: str
    average_rating: float
    reviews_count: int


def compute_average(ratings: Iterable[int]) -> tuple[float, int]:
    """Return ``(average, count)`` with the average rounded half-up to 2 places.

    An empty set averages to 0.
    """
    values = list(ratings)
    count = len(values)
    if count == 0:
        return 0.0, 0
    average = (Decimal(sum(values)) / Decimal(count)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP
    )
    return float(average), count


class RatingAggregationService:
    """Recomputes and persists restaurant rating aggregates."""

    def __init__(self, restaurants: RestaurantStore, reviews: ReviewStore) -> None:
        self._restaurants = restaurants
        self._reviews = reviews

    async def recompute_rating(self, restaurant_id: str) -> RatingSummary:
        """Recompute the rating fields of a restaurant from its reviews.

        Raises:
            RestaurantNotFoundError: If the restaurant does not exist.
        """
        restaurant = await self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            record_rating_recomputation("not_found")
            raise RestaurantNotFoundError(restaurant_id)

        try:
            reviews = await self._reviews.find_all_for_restaurant(restaurant_id)
            average, count = compute_average(review.rating for review in reviews)
            updated = await self._restaurants.update_by_id(
                restaurant_id,
                {"average_rating": average, "reviews_count": count},
            )
        except Exception:
            record_rating_recomputation("error")
            raise

        if updated is None:
            # Deleted between the existence check and the write
            record_rating_recomputation("not_found")
            raise RestaurantNotFoundError(restaurant_id)

        record_rating_recomputation("success")
        logger.debug(
            "Restaurant rating recomputed",
            restaurant_id=restaurant_id,
            average_rating=average,
            reviews_count=count,
        )
        return RatingSummary(
            restaurant_id=restaurant_id,
            average_rating=average,
            reviews_count=count,
        )
