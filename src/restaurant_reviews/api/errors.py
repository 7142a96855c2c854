"""Translation of service errors into HTTP errors."""

from __future__ import annotations

from restaurant_reviews.core.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    NotFoundException,
    UnauthorizedException,
)
from restaurant_reviews.services.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)
from restaurant_reviews.services.users.exceptions import InvalidCredentialsError


def to_http_error(error: ServiceError) -> AppException | ServiceError:
    """Return the HTTP error for a service error.

    Errors outside the known families are returned unchanged so that they
    reach the generic 500 handler.
    """
    if isinstance(error, InvalidInputError):
        return BadRequestException(error.message)
    if isinstance(error, NotFoundError):
        return NotFoundException(error.message)
    if isinstance(error, ConflictError):
        return ConflictException(error.message)
    if isinstance(error, InvalidCredentialsError):
        return UnauthorizedException(error.message)
    return error
