"""Restaurant request and response schemas."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field, HttpUrl

from restaurant_reviews.schemas.base import APIRequest, APIResponse


class RestaurantSortField(StrEnum):
    """Fields restaurants can be sorted by."""

    NAME = "name"
    AVERAGE_RATING = "average_rating"
    REVIEWS_COUNT = "reviews_count"
    CREATED_AT = "created_at"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class LatLng(APIRequest):
    """Coordinates of a restaurant."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Coordinates(APIResponse):
    """Coordinates as returned by the API."""

    lat: float
    lng: float


class RestaurantCreateRequest(APIRequest):
    """Body of ``POST /restaurants``.

    ``latlng`` may be omitted, in which case the address is geocoded.
    """

    name: str = Field(..., min_length=1, max_length=100)
    neighborhood: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)
    latlng: LatLng | None = None
    image: HttpUrl
    photograph: str | None = Field(default=None, min_length=1, max_length=100)
    cuisine_type: str = Field(..., min_length=1, max_length=50)
    operating_hours: dict[str, str]


class RestaurantUpdateRequest(APIRequest):
    """Body of ``PUT /restaurants/{id}``. Rating fields are not accepted."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    neighborhood: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, min_length=1, max_length=200)
    latlng: LatLng | None = None
    image: HttpUrl | None = None
    photograph: str | None = Field(default=None, min_length=1, max_length=100)
    cuisine_type: str | None = Field(default=None, min_length=1, max_length=50)
    operating_hours: dict[str, str] | None = None


class RestaurantResponse(APIResponse):
    """A restaurant as returned by the API."""

    id: str
    name: str
    neighborhood: str
    address: str
    latlng: Coordinates
    image: str
    photograph: str | None = None
    cuisine_type: str
    operating_hours: dict[str, str]
    average_rating: float
    reviews_count: int
    created_at: datetime
