"""Store interfaces the services depend on.

The MongoDB repositories in this package implement them; tests supply
in-memory implementations. Identifiers cross these interfaces as hex strings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol


if TYPE_CHECKING:
    from restaurant_reviews.database.models import (
        RestaurantRecord,
        ReviewRecord,
        UserRecord,
    )


class ReviewStore(Protocol):
    """Persistence operations on reviews."""

    async def find_one(self, user_id: str, restaurant_id: str) -> ReviewRecord | None:
        """Find the review ``user_id`` wrote for ``restaurant_id``."""
        ...

    async def find_by_id(self, review_id: str) -> ReviewRecord | None: ...

    async def find_all_for_restaurant(self, restaurant_id: str) -> list[ReviewRecord]:
        """All reviews of a restaurant, newest first."""
        ...

    async def find_all_for_user(self, user_id: str) -> list[ReviewRecord]:
        """All reviews written by a user, newest first."""
        ...

    async def create(self, fields: dict[str, Any]) -> ReviewRecord:
        """Insert a review.

        Raises:
            DuplicateRecordError: If the user already reviewed the restaurant.
        """
        ...

    async def update_by_id(
        self, review_id: str, fields: dict[str, Any]
    ) -> ReviewRecord | None: ...

    async def delete_by_id(self, review_id: str) -> ReviewRecord | None: ...

    async def delete_all_for_user(self, user_id: str) -> int: ...

    async def delete_all_for_restaurant(self, restaurant_id: str) -> int: ...


class RestaurantStore(Protocol):
    """Persistence operations on restaurants."""

    async def find_by_id(self, restaurant_id: str) -> RestaurantRecord | None: ...

    async def find_by_ids(self, restaurant_ids: list[str]) -> list[RestaurantRecord]: ...

    async def find_many(
        self,
        *,
        name_contains: str | None = None,
        cuisine_type: str | None = None,
        neighborhood: str | None = None,
        sort_by: str = "name",
        descending: bool = False,
        limit: int | None = None,
    ) -> list[RestaurantRecord]:
        """Filtered, sorted listing. Text filters match case-insensitively."""
        ...

    async def create(self, fields: dict[str, Any]) -> RestaurantRecord: ...

    async def update_by_id(
        self, restaurant_id: str, fields: dict[str, Any]
    ) -> RestaurantRecord | None: ...

    async def delete_by_id(self, restaurant_id: str) -> RestaurantRecord | None: ...


class UserStore(Protocol):
    """Persistence operations on users."""

    async def find_by_id(self, user_id: str) -> UserRecord | None: ...

    async def find_by_ids(self, user_ids: list[str]) -> list[UserRecord]: ...

    async def find_by_email(self, email: str) -> UserRecord | None: ...

    async def find_by_username(self, username: str) -> UserRecord | None: ...

    async def find_all(self) -> list[UserRecord]: ...

    async def create(self, fields: dict[str, Any]) -> UserRecord:
        """Insert a user.

        Raises:
            DuplicateRecordError: If the username or email is taken.
        """
        ...

    async def update_by_id(
        self, user_id: str, fields: dict[str, Any]
    ) -> UserRecord | None: ...

    async def delete_by_id(self, user_id: str) -> UserRecord | None: ...

    async def add_favourite(self, user_id: str, restaurant_id: str) -> UserRecord | None:
        """Add to the favourites set (no duplicates)."""
        ...

    async def remove_favourite(
        self, user_id: str, restaurant_id: str
    ) -> UserRecord | None: ...

    async def remove_favourite_everywhere(self, restaurant_id: str) -> int:
        """Pull a restaurant from every user's favourites."""
        ...
