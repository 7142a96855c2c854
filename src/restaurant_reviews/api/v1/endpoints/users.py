"""User endpoints.

Listing users, looking a user up by email and deleting users are admin
only. A profile can be updated by its owner or an admin. Favourites always
act on the caller.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from restaurant_reviews.api.dependencies import get_user_service
from restaurant_reviews.api.errors import to_http_error
from restaurant_reviews.auth.dependencies import (
    CurrentCaller,
    RequireAdmin,
    RequireOwnerOrAdmin,
)
from restaurant_reviews.schemas.base import MessageResponse
from restaurant_reviews.schemas.restaurant import RestaurantResponse
from restaurant_reviews.schemas.user import (
    FavouriteRequest,
    FavouritesResponse,
    UserResponse,
    UserUpdateRequest,
)
from restaurant_reviews.services.exceptions import ServiceError
from restaurant_reviews.services.users.service import UserService


router = APIRouter(prefix="/users", tags=["users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get(
    "",
    response_model=list[UserResponse],
    dependencies=[Depends(RequireAdmin())],
    summary="List all users",
)
async def list_users(users: UserServiceDep) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in await users.list_users()]


@router.post(
    "/favourites",
    response_model=UserResponse,
    summary="Add a restaurant to the caller's favourites",
)
async def add_favourite(
    data: FavouriteRequest,
    caller: CurrentCaller,
    users: UserServiceDep,
) -> UserResponse:
    try:
        user = await users.add_favourite(caller.user_id, data.restaurant_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.delete(
    "/favourites",
    response_model=UserResponse,
    summary="Remove a restaurant from the caller's favourites",
)
async def remove_favourite(
    data: FavouriteRequest,
    caller: CurrentCaller,
    users: UserServiceDep,
) -> UserResponse:
    try:
        user = await users.remove_favourite(caller.user_id, data.restaurant_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.get(
    "/email/{email}",
    response_model=UserResponse,
    dependencies=[Depends(RequireAdmin())],
    summary="Find a user by email",
)
async def get_user_by_email(email: str, users: UserServiceDep) -> UserResponse:
    try:
        user = await users.get_by_email(email.lower())
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.get(
    "/username/{username}",
    response_model=UserResponse,
    summary="Find a user by username",
)
async def get_user_by_username(
    username: str,
    caller: CurrentCaller,
    users: UserServiceDep,
) -> UserResponse:
    try:
        user = await users.get_by_username(username)
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
)
async def get_user(
    user_id: str,
    caller: CurrentCaller,
    users: UserServiceDep,
) -> UserResponse:
    try:
        user = await users.get(user_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}/favourites",
    response_model=FavouritesResponse,
    summary="A user's favourite restaurants",
)
async def get_favourites(
    user_id: str,
    caller: CurrentCaller,
    users: UserServiceDep,
) -> FavouritesResponse:
    try:
        restaurants = await users.favourites(user_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return FavouritesResponse(
        user_id=user_id,
        favourites=[RestaurantResponse.model_validate(r) for r in restaurants],
    )


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(RequireOwnerOrAdmin(path_param="user_id"))],
    summary="Update a user's profile",
)
async def update_user(
    user_id: str,
    data: UserUpdateRequest,
    users: UserServiceDep,
) -> UserResponse:
    """Update first name, last name and username. Other fields are ignored."""
    try:
        user = await users.update(user_id, data)
    except ServiceError as e:
        raise to_http_error(e) from None
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(RequireAdmin())],
    summary="Delete a user",
)
async def delete_user(user_id: str, users: UserServiceDep) -> MessageResponse:
    """Delete a user and their reviews, recomputing affected restaurants."""
    try:
        await users.delete(user_id)
    except ServiceError as e:
        raise to_http_error(e) from None
    return MessageResponse(message="User deleted successfully")
