"""Review lifecycle service.

A review moves from nonexistent to active on create, stays active through
updates and ends on delete. Every transition that changes the review set of
a restaurant is followed by a rating recomputation for that restaurant. The
write and the recomputation are not atomic: if the recomputation fails the
review stays persisted and the error is surfaced to the caller; the next
mutation on the same restaurant restores the aggregate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from restaurant_reviews.database.exceptions import DuplicateRecordError
from restaurant_reviews.database.identifiers import is_valid_object_id
from restaurant_reviews.observability.logging import get_logger
from restaurant_reviews.observability.metrics import record_review_mutation
from restaurant_reviews.schemas.review import (
    RestaurantReviewResponse,
    RestaurantSummary,
    ReviewAuthor,
    ReviewDeletedResponse,
    UserReviewResponse,
)
from restaurant_reviews.services.exceptions import ServiceError
from restaurant_reviews.services.ratings.exceptions import RestaurantNotFoundError
from restaurant_reviews.services.reviews.exceptions import (
    DuplicateReviewError,
    InvalidReviewError,
    ReviewedRestaurantNotFoundError,
    ReviewerNotFoundError,
    ReviewNotFoundError,
)


if TYPE_CHECKING:
    from restaurant_reviews.database.models import ReviewRecord
    from restaurant_reviews.database.repositories.protocol import (
        RestaurantStore,
        ReviewStore,
        UserStore,
    )
    from restaurant_reviews.services.ratings.service import RatingAggregationService

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5
UPDATABLE_FIELDS = frozenset({"rating", "review"})


def validate_rating(rating: Any) -> int:
    """Return ``rating`` if it is an integer from 1 to 5.

    Raises:
        InvalidReviewError: Otherwise. Booleans are rejected.
    """
    if (
        isinstance(rating, bool)
        or not isinstance(rating, int)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        msg = f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        raise InvalidReviewError(msg)
    return rating


class ReviewService:
    """Creates, updates and deletes reviews and keeps ratings in sync."""

    def __init__(
        self,
        reviews: ReviewStore,
        restaurants: RestaurantStore,
        users: UserStore,
        ratings: RatingAggregationService,
    ) -> None:
        self._reviews = reviews
        self._restaurants = restaurants
        self._users = users
        self._ratings = ratings

    async def create(
        self,
        caller_id: str,
        restaurant_id: str,
        rating: Any,
        body: str = "",
    ) -> ReviewRecord:
        """Create the caller's review of a restaurant.

        Raises:
            InvalidReviewError: Rating out of range or malformed restaurant id.
            ReviewedRestaurantNotFoundError: The restaurant does not exist.
            ReviewerNotFoundError: The caller's user record does not exist.
            DuplicateReviewError: The caller already reviewed the restaurant.
            RestaurantNotFoundError: The restaurant vanished before the
                rating could be recomputed. The review is kept.
        """
        try:
            validate_rating(rating)
            if not is_valid_object_id(restaurant_id):
                msg = "Invalid restaurant ID format"
                raise InvalidReviewError(msg)

            if await self._restaurants.find_by_id(restaurant_id) is None:
                raise ReviewedRestaurantNotFoundError(restaurant_id)
            if await self._users.find_by_id(caller_id) is None:
                raise ReviewerNotFoundError(caller_id)

            if await self._reviews.find_one(caller_id, restaurant_id) is not None:
                raise DuplicateReviewError

            try:
                review = await self._reviews.create(
                    {
                        "user": caller_id,
                        "restaurant": restaurant_id,
                        "rating": rating,
                        "review": body or "",
                    }
                )
            except DuplicateRecordError as e:
                # A concurrent create won the race on the unique index
                raise DuplicateReviewError from e
        except ServiceError as e:
            record_review_mutation("create", _outcome(e))
            raise

        record_review_mutation("create", "success")
        logger.info(
            "Review created",
            review_id=review.id,
            restaurant_id=restaurant_id,
            user_id=caller_id,
        )

        await self._ratings.recompute_rating(restaurant_id)
        return review

    async def update(self, review_id: str, fields: dict[str, Any]) -> ReviewRecord:
        """Apply a partial update of rating and/or text.

        Keys other than ``rating`` and ``review`` and ``None`` values are
        ignored.

        Raises:
            InvalidReviewError: Rating out of range.
            ReviewNotFoundError: The review does not exist.
        """
        changes = {
            key: value
            for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        try:
            if "rating" in changes:
                validate_rating(changes["rating"])

            review = await self._reviews.update_by_id(review_id, changes)
            if review is None:
                raise ReviewNotFoundError(review_id)
        except ServiceError as e:
            record_review_mutation("update", _outcome(e))
            raise

        record_review_mutation("update", "success")
        logger.info("Review updated", review_id=review_id, fields=sorted(changes))

        await self._ratings.recompute_rating(review.restaurant)
        return review

    async def delete(self, review_id: str) -> ReviewDeletedResponse:
        """Delete a review and recompute its former restaurant.

        Raises:
            ReviewNotFoundError: The review does not exist.
        """
        review = await self._reviews.delete_by_id(review_id)
        if review is None:
            record_review_mutation("delete", "not_found")
            raise ReviewNotFoundError(review_id)

        record_review_mutation("delete", "success")
        logger.info(
            "Review deleted", review_id=review_id, restaurant_id=review.restaurant
        )

        await self._ratings.recompute_rating(review.restaurant)
        return ReviewDeletedResponse(
            message="Review deleted successfully",
            review_id=review.id,
            restaurant_id=review.restaurant,
        )

    async def get_by_id(self, review_id: str) -> ReviewRecord:
        """Fetch one review.

        Raises:
            ReviewNotFoundError: The review does not exist.
        """
        review = await self._reviews.find_by_id(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    async def list_for_restaurant(
        self, restaurant_id: str
    ) -> list[RestaurantReviewResponse]:
        """Reviews of a restaurant, newest first, with each author's username."""
        reviews = await self._reviews.find_all_for_restaurant(restaurant_id)
        authors = {
            user.id: ReviewAuthor(id=user.id, username=user.username)
            for user in await self._users.find_by_ids(
                sorted({review.user for review in reviews})
            )
        }
        return [
            RestaurantReviewResponse(
                id=review.id,
                user=authors.get(review.user),
                restaurant=review.restaurant,
                rating=review.rating,
                review=review.review,
                created_at=review.created_at,
                updated_at=review.updated_at,
            )
            for review in reviews
        ]

    async def list_for_user(self, user_id: str) -> list[UserReviewResponse]:
        """Reviews written by a user, newest first, with restaurant names."""
        reviews = await self._reviews.find_all_for_user(user_id)
        restaurants = {
            restaurant.id: RestaurantSummary(id=restaurant.id, name=restaurant.name)
            for restaurant in await self._restaurants.find_by_ids(
                sorted({review.restaurant for review in reviews})
            )
        }
        return [
            UserReviewResponse(
                id=review.id,
                user=review.user,
                restaurant=restaurants.get(review.restaurant),
                rating=review.rating,
                review=review.review,
                created_at=review.created_at,
                updated_at=review.updated_at,
            )
            for review in reviews
        ]

    async def delete_all_for_user(self, user_id: str) -> list[str]:
        """Delete every review of a user and recompute affected restaurants.

        Returns:
            Ids of the restaurants whose aggregate was recomputed.
        """
        reviews = await self._reviews.find_all_for_user(user_id)
        if not reviews:
            return []

        affected = sorted({review.restaurant for review in reviews})
        deleted = await self._reviews.delete_all_for_user(user_id)
        logger.info("Deleted reviews of user", user_id=user_id, count=deleted)

        recomputed: list[str] = []
        for restaurant_id in affected:
            try:
                await self._ratings.recompute_rating(restaurant_id)
            except RestaurantNotFoundError:
                logger.warning(
                    "Skipping rating recomputation for missing restaurant",
                    restaurant_id=restaurant_id,
                )
                continue
            recomputed.append(restaurant_id)
        return recomputed


def _outcome(error: ServiceError) -> str:
    if isinstance(error, DuplicateReviewError):
        return "conflict"
    if isinstance(error, InvalidReviewError):
        return "invalid"
    return "not_found"
