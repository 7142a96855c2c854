"""Exceptions for the user service."""

from __future__ import annotations

from restaurant_reviews.services.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)


class UserNotFoundError(NotFoundError):
    """Raised when the user does not exist."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class DuplicateUserError(ConflictError):
    """Raised when a username or email is already taken."""


class InvalidCredentialsError(ServiceError):
    """Raised when login fails. Deliberately does not say which part was wrong."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidUserInputError(InvalidInputError):
    """Raised for malformed user or restaurant ids."""


class FavouriteRestaurantNotFoundError(NotFoundError):
    """Raised when adding a restaurant that does not exist to favourites."""

    def __init__(self) -> None:
        super().__init__("Restaurant not found")
