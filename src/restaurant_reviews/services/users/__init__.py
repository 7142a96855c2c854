"""User accounts."""

from restaurant_reviews.services.users.exceptions import (
    DuplicateUserError,
    FavouriteRestaurantNotFoundError,
    InvalidCredentialsError,
    InvalidUserInputError,
    UserNotFoundError,
)
from restaurant_reviews.services.users.service import UserService


__all__ = [
    "DuplicateUserError",
    "FavouriteRestaurantNotFoundError",
    "InvalidCredentialsError",
    "InvalidUserInputError",
    "UserNotFoundError",
    "UserService",
]
