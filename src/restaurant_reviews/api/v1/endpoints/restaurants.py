"""Restaurant endpoints.

Reads are public. Creating a restaurant requires a signed-in caller;
updating and deleting one requires an admin.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from restaurant_reviews.api.dependencies import get_restaurant_service
from restaurant_reviews.api.errors import to_http_error
from restaurant_reviews.auth.dependencies import CurrentCaller, RequireAdmin
from restaurant_reviews.observability.logging import get_logger
from restaurant_reviews.schemas.base import MessageResponse
from restaurant_reviews.schemas.restaurant import (
    RestaurantCreateRequest,
    RestaurantResponse,
    RestaurantSortField,
    RestaurantUpdateRequest,
    SortOrder,
)
from restaurant_reviews.services.exceptions import ServiceError
from restaurant_reviews.services.restaurants.service import RestaurantService


logger = get_logger(__name__)

router = APIRouter(prefix="/restaurants", tags=["restaurants"])

RestaurantServiceDep = Annotated[RestaurantService, Depends(get_restaurant_service)]


@router.get(
    "",
    response_model=list[RestaurantResponse],
    summary="List restaurants",
)
async def list_restaurants(
    restaurants: RestaurantServiceDep,
    search: Annotated[
        str | None, Query(description="Case-insensitive name substring")
    ] = None,
    cuisine: Annotated[str | None, Query(description="Cuisine type")] = None,
    neighborhood: Annotated[str | None, Query(description="Neighborhood")] = None,
    sort_by: Annotated[RestaurantSortField, Query()] = RestaurantSortField.NAME,
    order: Annotated[SortOrder, Query()] = SortOrder.ASC,
) -> list[RestaurantResponse]:
    records = await restaurants.list_restaurants(
        search=search,
        cuisine=cuisine,
        neighborhood=neighborhood,
        sort_by=sort_by,
        order=order,
    )
    return [RestaurantResponse.model_validate(r) for r in records]


@router.get(
    "/top",
    response_model=list[RestaurantResponse],
    summary="Ten best rated restaurants",
)
async def top_restaurants(restaurants: RestaurantServiceDep) -> list[RestaurantResponse]:
    return [RestaurantResponse.model_validate(r) for r in await restaurants.top_rated()]


@router.get(
    "/name/{name}",
    response_model=list[RestaurantResponse],
    summary="Search restaurants by name",
)
async def restaurants_by_name(
    name: str,
    restaurants: RestaurantServiceDep,
) -> list[RestaurantResponse]:
    records = await restaurants.search_by_name(name)
    return [RestaurantResponse.model_validate(r) for r in records]


@router.get(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    summary="Get a restaurant",
)
async def get_restaurant(
    restaurant_id: str,
    restaurants: RestaurantServiceDep,
) -> RestaurantResponse:
    try:
        record = await restaurants.get(restaurant_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return RestaurantResponse.model_validate(record)


@router.post(
    "",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a restaurant",
)
async def create_restaurant(
    data: RestaurantCreateRequest,
    caller: CurrentCaller,
    restaurants: RestaurantServiceDep,
) -> RestaurantResponse:
    """Create a restaurant. Coordinates are geocoded from the address if omitted."""
    try:
        record = await restaurants.create(data)
    except ServiceError as e:
        raise to_http_error(e) from None

    logger.info("Restaurant created by caller", restaurant_id=record.id, caller_id=caller.user_id)
    return RestaurantResponse.model_validate(record)


@router.put(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    dependencies=[Depends(RequireAdmin())],
    summary="Update a restaurant",
)
async def update_restaurant(
    restaurant_id: str,
    data: RestaurantUpdateRequest,
    restaurants: RestaurantServiceDep,
) -> RestaurantResponse:
    try:
        record = await restaurants.update(restaurant_id, data)
    except ServiceError as e:
        raise to_http_error(e) from None
    return RestaurantResponse.model_validate(record)


@router.delete(
    "/{restaurant_id}",
    response_model=MessageResponse,
    dependencies=[Depends(RequireAdmin())],
    summary="Delete a restaurant",
)
async def delete_restaurant(
    restaurant_id: str,
    restaurants: RestaurantServiceDep,
) -> MessageResponse:
    """Delete a restaurant, its reviews and all favourites pointing at it."""
    try:
        await restaurants.delete(restaurant_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return MessageResponse(message="Restaurant deleted successfully")
