"""Review request and response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from restaurant_reviews.schemas.base import APIRequest, APIResponse


class ReviewCreateRequest(APIRequest):
    """Body of ``POST /reviews``.

    The rating range and the restaurant id format are checked by the review
    service so that they surface as ``INVALID_INPUT`` errors.
    """

    restaurant: str
    rating: int
    review: str = Field(default="", max_length=1000)


class ReviewUpdateRequest(APIRequest):
    """Body of ``PUT /reviews/{id}``. Only rating and text can change."""

    rating: int | None = None
    review: str | None = Field(default=None, max_length=1000)


class ReviewResponse(APIResponse):
    """A review as returned by the API."""

    id: str
    user: str
    restaurant: str
    rating: int
    review: str
    created_at: datetime
    updated_at: datetime


class ReviewAuthor(APIResponse):
    """Reviewer fields embedded in restaurant review listings."""

    id: str
    username: str


class RestaurantSummary(APIResponse):
    """Restaurant fields embedded in a user's review listing."""

    id: str
    name: str


class RestaurantReviewResponse(APIResponse):
    """A review of a restaurant with its author's username."""

    id: str
    user: ReviewAuthor | None
    restaurant: str
    rating: int
    review: str
    created_at: datetime
    updated_at: datetime


class UserReviewResponse(APIResponse):
    """A review written by a user with the reviewed restaurant's name."""

    id: str
    user: str
    restaurant: RestaurantSummary | None
    rating: int
    review: str
    created_at: datetime
    updated_at: datetime


class ReviewDeletedResponse(APIResponse):
    """Confirmation of a deleted review."""

    message: str
    review_id: str
    restaurant_id: str
