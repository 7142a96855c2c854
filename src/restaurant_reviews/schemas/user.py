"""User request and response schemas.

Email, password hash and admin flag are never part of ``UserResponse``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from restaurant_reviews.schemas.base import APIRequest, APIResponse
from restaurant_reviews.schemas.restaurant import RestaurantResponse


USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"


class UserResponse(APIResponse):
    """Public view of a user."""

    id: str
    username: str
    first_name: str
    last_name: str
    favourite_restaurants: list[str]
    created_at: datetime


class UserUpdateRequest(APIRequest):
    """Body of ``PUT /users/{id}``.

    Only these fields may be changed; anything else in the body is ignored.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)
    username: str | None = Field(
        default=None, min_length=3, max_length=30, pattern=USERNAME_PATTERN
    )


class FavouriteRequest(APIRequest):
    """Body of the favourites endpoints."""

    restaurant_id: str


class FavouritesResponse(APIResponse):
    """A user's favourite restaurants."""

    user_id: str
    favourites: list[RestaurantResponse]
