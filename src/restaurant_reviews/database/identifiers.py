"""Helpers for MongoDB ObjectId identifiers exposed as hex strings."""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


def is_valid_object_id(value: Any) -> bool:
    """Return True when ``value`` is a 24 character hex ObjectId (or an ObjectId)."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and ObjectId.is_valid(value) and len(value) == 24


def to_object_id(value: str | ObjectId) -> ObjectId:
    """Convert a hex string to ``ObjectId``.

    Raises:
        InvalidId: If ``value`` is not a valid identifier.
    """
    if isinstance(value, ObjectId):
        return value
    if not is_valid_object_id(value):
        msg = f"'{value}' is not a valid ObjectId"
        raise InvalidId(msg)
    return ObjectId(value)


def new_object_id() -> str:
    """Generate a fresh identifier as a hex string."""
    return str(ObjectId())


def normalize_id(value: Any) -> str:
    """Canonical string form of an identifier used for equality checks."""
    return str(value).strip().lower()
