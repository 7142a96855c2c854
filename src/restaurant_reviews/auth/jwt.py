"""JWT token handling and caller identity.

Tokens carry ``{id, is_admin, exp}``. Older tokens used ``userId`` and
``isAdmin``; both spellings are accepted here and nowhere else, so the rest of
the application only ever sees a ``Caller``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ConfigDict

from restaurant_reviews.auth.exceptions import TokenExpiredError, TokenInvalidError
from restaurant_reviews.core.config import get_settings
from restaurant_reviews.observability.logging import get_logger


logger = get_logger(__name__)


class Caller(BaseModel):
    """The verified identity behind a request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    is_admin: bool = False


def caller_from_claims(claims: dict[str, Any]) -> Caller:
    """Normalize decoded token claims into a ``Caller``.

    Raises:
        TokenInvalidError: If the claims carry no user id.
    """
    user_id = claims.get("id") or claims.get("userId")
    if not user_id:
        msg = "Invalid token"
        raise TokenInvalidError(msg)

    is_admin = claims.get("is_admin")
    if is_admin is None:
        is_admin = claims.get("isAdmin", False)

    return Caller(user_id=str(user_id), is_admin=is_admin is True)


def create_access_token(
    user_id: str,
    *,
    is_admin: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for a user.

    Args:
        user_id: The user's identifier.
        is_admin: Admin flag carried in the token.
        expires_delta: Custom lifetime. If None, uses the configured default.

    Returns:
        Encoded JWT token string.
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.jwt.access_token_expire_minutes)

    payload = {
        "id": user_id,
        "is_admin": is_admin,
        "exp": datetime.now(UTC) + expires_delta,
    }

    return jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str) -> Caller:
    """Verify a token and return the caller it identifies.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid.
    """
    settings = get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
    except ExpiredSignatureError as e:
        logger.debug("Token expired", error=str(e))
        msg = "Token expired"
        raise TokenExpiredError(msg) from e
    except JWTError as e:
        logger.warning("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

    return caller_from_claims(claims)
