"""Records stored in the MongoDB collections.

Records are the repository-level view of a document: ``_id`` becomes ``id``
and every ObjectId reference is exposed as a hex string. They carry every
stored field, including the ones hidden from API responses (email, password
hash, admin flag); response schemas decide what leaves the service.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current time used for document timestamps."""
    return datetime.now(UTC)


def _stringify_ids(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_stringify_ids(v) for v in value]
    return value


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> _Record:
        """Build a record from a raw MongoDB document."""
        data = {k: _stringify_ids(v) for k, v in document.items() if k != "_id"}
        data["id"] = str(document["_id"])
        return cls.model_validate(data)


class LatLng(BaseModel):
    """Geographic coordinate pair."""

    lat: float
    lng: float


class UserRecord(_Record):
    """A registered user."""

    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    favourite_restaurants: list[str] = Field(default_factory=list)
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class RestaurantRecord(_Record):
    """A restaurant with its denormalized rating aggregate."""

    name: str
    neighborhood: str
    address: str
    latlng: LatLng
    image: str
    photograph: str | None = None
    cuisine_type: str
    operating_hours: dict[str, str] = Field(default_factory=dict)
    average_rating: float = 0
    reviews_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)


class ReviewRecord(_Record):
    """One user's review of one restaurant."""

    user: str
    restaurant: str
    rating: int
    review: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
