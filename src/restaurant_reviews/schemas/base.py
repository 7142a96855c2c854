"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies
    - DownstreamResponse: For responses received from external services

Field names are snake_case on the wire, matching the stored documents.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
        str_strip_whitespace=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Configured to ignore extra fields - clients may send additional
    properties that we don't recognize, and that's okay.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields and to build from records.
    """

    model_config = ConfigDict(
        extra="forbid",
        from_attributes=True,
    )


class DownstreamResponse(_BaseSchema):
    """Base class for responses received from external services.

    Configured to ignore extra fields - upstream services may add
    new properties, and we don't want that to break our parsing.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class MessageResponse(APIResponse):
    """Plain confirmation message."""

    message: str
