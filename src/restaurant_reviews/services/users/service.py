"""User service: registration, login, profiles and favourites."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from restaurant_reviews.auth.jwt import create_access_token
from restaurant_reviews.auth.passwords import hash_password, verify_password
from restaurant_reviews.database.exceptions import DuplicateRecordError
from restaurant_reviews.database.identifiers import is_valid_object_id
from restaurant_reviews.observability.logging import get_logger
from restaurant_reviews.services.users.exceptions import (
    DuplicateUserError,
    FavouriteRestaurantNotFoundError,
    InvalidCredentialsError,
    InvalidUserInputError,
    UserNotFoundError,
)


if TYPE_CHECKING:
    from restaurant_reviews.database.models import RestaurantRecord, UserRecord
    from restaurant_reviews.database.repositories.protocol import (
        RestaurantStore,
        UserStore,
    )
    from restaurant_reviews.schemas.auth import RegisterRequest
    from restaurant_reviews.schemas.user import UserUpdateRequest
    from restaurant_reviews.services.reviews.service import ReviewService

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"first_name", "last_name", "username"})


def _check_id(value: str, label: str) -> None:
    if not is_valid_object_id(value):
        msg = f"Invalid {label} ID format"
        raise InvalidUserInputError(msg)


class UserService:
    """Manages user accounts.

    Deleting a user also deletes their reviews through the review service so
    that every affected restaurant gets its rating recomputed.
    """

    def __init__(
        self,
        users: UserStore,
        restaurants: RestaurantStore,
        reviews: ReviewService,
    ) -> None:
        self._users = users
        self._restaurants = restaurants
        self._reviews = reviews

    async def register(self, data: RegisterRequest) -> UserRecord:
        """Create an account with a bcrypt password hash.

        Raises:
            DuplicateUserError: Username or email already exists.
        """
        if (
            await self._users.find_by_username(data.username) is not None
            or await self._users.find_by_email(data.email) is not None
        ):
            msg = "Username or email already exists"
            raise DuplicateUserError(msg)

        password_hash = await asyncio.to_thread(hash_password, data.password)
        try:
            user = await self._users.create(
                {
                    "username": data.username,
                    "email": data.email,
                    "password": password_hash,
                    "first_name": data.first_name,
                    "last_name": data.last_name,
                }
            )
        except DuplicateRecordError as e:
            msg = "Username or email already exists"
            raise DuplicateUserError(msg) from e

        logger.info("User registered", user_id=user.id, username=user.username)
        return user

    async def login(self, email: str, password: str) -> tuple[UserRecord, str]:
        """Check credentials and issue an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
        """
        user = await self._users.find_by_email(email)
        if user is None or not await asyncio.to_thread(
            verify_password, password, user.password
        ):
            logger.info("Login failed", email=email)
            raise InvalidCredentialsError

        token = create_access_token(user.id, is_admin=user.is_admin)
        logger.info("User logged in", user_id=user.id)
        return user, token

    async def list_users(self) -> list[UserRecord]:
        return await self._users.find_all()

    async def get(self, user_id: str) -> UserRecord:
        _check_id(user_id, "user")
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError
        return user

    async def get_by_email(self, email: str) -> UserRecord:
        user = await self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError
        return user

    async def get_by_username(self, username: str) -> UserRecord:
        user = await self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError
        return user

    async def favourites(self, user_id: str) -> list[RestaurantRecord]:
        """Favourite restaurants of a user, in the order they were added."""
        user = await self.get(user_id)
        restaurants = {
            r.id: r for r in await self._restaurants.find_by_ids(user.favourite_restaurants)
        }
        return [restaurants[rid] for rid in user.favourite_restaurants if rid in restaurants]

    async def update(self, user_id: str, data: UserUpdateRequest) -> UserRecord:
        """Update whitelisted profile fields.

        Raises:
            UserNotFoundError: No such user.
            DuplicateUserError: The new username is taken.
        """
        changes = {
            key: value
            for key, value in data.model_dump(exclude_none=True).items()
            if key in UPDATABLE_FIELDS
        }
        if not changes:
            return await self.get(user_id)

        _check_id(user_id, "user")
        if "username" in changes:
            holder = await self._users.find_by_username(changes["username"])
            if holder is not None and holder.id != user_id:
                msg = "Username already exists"
                raise DuplicateUserError(msg)

        try:
            user = await self._users.update_by_id(user_id, changes)
        except DuplicateRecordError as e:
            msg = "Username already exists"
            raise DuplicateUserError(msg) from e
        if user is None:
            raise UserNotFoundError

        logger.info("User updated", user_id=user_id, fields=sorted(changes))
        return user

    async def delete(self, user_id: str) -> UserRecord:
        """Delete a user together with their reviews.

        Raises:
            UserNotFoundError: No such user.
        """
        _check_id(user_id, "user")
        user = await self._users.delete_by_id(user_id)
        if user is None:
            raise UserNotFoundError

        recomputed = await self._reviews.delete_all_for_user(user_id)
        logger.info(
            "User deleted",
            user_id=user_id,
            restaurants_recomputed=len(recomputed),
        )
        return user

    async def add_favourite(self, user_id: str, restaurant_id: str) -> UserRecord:
        """Add a restaurant to the user's favourites; adding twice is a no-op.

        Raises:
            InvalidUserInputError: Malformed restaurant id.
            FavouriteRestaurantNotFoundError: No such restaurant.
            UserNotFoundError: No such user.
        """
        _check_id(restaurant_id, "restaurant")
        if await self._restaurants.find_by_id(restaurant_id) is None:
            raise FavouriteRestaurantNotFoundError

        user = await self._users.add_favourite(user_id, restaurant_id)
        if user is None:
            raise UserNotFoundError
        return user

    async def remove_favourite(self, user_id: str, restaurant_id: str) -> UserRecord:
        """Remove a restaurant from the user's favourites.

        Raises:
            InvalidUserInputError: Malformed restaurant id.
            UserNotFoundError: No such user.
        """
        _check_id(restaurant_id, "restaurant")
        user = await self._users.remove_favourite(user_id, restaurant_id)
        if user is None:
            raise UserNotFoundError
        return user
