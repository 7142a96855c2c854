"""Helpers for authenticated requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from restaurant_reviews.auth.jwt import create_access_token


if TYPE_CHECKING:
    from restaurant_reviews.database.models import UserRecord


def bearer(user: UserRecord) -> dict[str, str]:
    """Authorization header carrying a valid token for a stored user."""
    token = create_access_token(user.id, is_admin=user.is_admin)
    return {"Authorization": f"Bearer {token}"}
