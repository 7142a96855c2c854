"""Review endpoints.

All routes require a signed-in caller. Updating or deleting a review is
limited to its author and admins.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from restaurant_reviews.api.dependencies import get_review_service
from restaurant_reviews.api.errors import to_http_error
from restaurant_reviews.auth.dependencies import CurrentCaller, RequireOwnerOrAdmin
from restaurant_reviews.schemas.review import (
    RestaurantReviewResponse,
    ReviewCreateRequest,
    ReviewDeletedResponse,
    ReviewResponse,
    ReviewUpdateRequest,
    UserReviewResponse,
)
from restaurant_reviews.services.exceptions import ServiceError
from restaurant_reviews.services.reviews.service import ReviewService


router = APIRouter(prefix="/reviews", tags=["reviews"])

ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]

# Ownership of a review is always read from the stored review
require_review_owner = RequireOwnerOrAdmin(review_param="review_id")


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a restaurant",
)
async def create_review(
    data: ReviewCreateRequest,
    caller: CurrentCaller,
    reviews: ReviewServiceDep,
) -> ReviewResponse:
    try:
        review = await reviews.create(
            caller.user_id, data.restaurant, data.rating, data.review
        )
    except ServiceError as e:
        raise to_http_error(e) from None
    return ReviewResponse.model_validate(review)


@router.get(
    "/restaurant/{restaurant_id}",
    response_model=list[RestaurantReviewResponse],
    summary="Reviews of a restaurant",
)
async def reviews_for_restaurant(
    restaurant_id: str,
    caller: CurrentCaller,
    reviews: ReviewServiceDep,
) -> list[RestaurantReviewResponse]:
    return await reviews.list_for_restaurant(restaurant_id)


@router.get(
    "/user/{user_id}",
    response_model=list[UserReviewResponse],
    summary="Reviews written by a user",
)
async def reviews_for_user(
    user_id: str,
    caller: CurrentCaller,
    reviews: ReviewServiceDep,
) -> list[UserReviewResponse]:
    return await reviews.list_for_user(user_id)


@router.get(
    "/{review_id}",
    response_model=ReviewResponse,
    summary="Get a review",
)
async def get_review(
    review_id: str,
    caller: CurrentCaller,
    reviews: ReviewServiceDep,
) -> ReviewResponse:
    try:
        review = await reviews.get_by_id(review_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return ReviewResponse.model_validate(review)


@router.put(
    "/{review_id}",
    response_model=ReviewResponse,
    dependencies=[Depends(require_review_owner)],
    summary="Update a review",
)
async def update_review(
    review_id: str,
    data: ReviewUpdateRequest,
    reviews: ReviewServiceDep,
) -> ReviewResponse:
    try:
        review = await reviews.update(review_id, data.model_dump(exclude_unset=True))
    except ServiceError as e:
        raise to_http_error(e) from None
    return ReviewResponse.model_validate(review)


@router.delete(
    "/{review_id}",
    response_model=ReviewDeletedResponse,
    dependencies=[Depends(require_review_owner)],
    summary="Delete a review",
)
async def delete_review(
    review_id: str,
    reviews: ReviewServiceDep,
) -> ReviewDeletedResponse:
    try:
        return await reviews.delete(review_id)
    except ServiceError as e:
        raise to_http_error(e) from None
