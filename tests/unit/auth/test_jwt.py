"""Unit tests for JWT token handling.

Tests cover:
- Token creation and decoding into a Caller
- Claim normalization (current and legacy spellings)
- Expired versus invalid tokens
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from jose import jwt

from restaurant_reviews.auth.exceptions import TokenExpiredError, TokenInvalidError
from restaurant_reviews.auth.jwt import (
    Caller,
    caller_from_claims,
    create_access_token,
    decode_token,
)
from restaurant_reviews.core.config import get_settings


pytestmark = pytest.mark.unit

TEST_JWT_SECRET = get_settings().JWT_SECRET_KEY


def _sign(claims: dict, secret: str = TEST_JWT_SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


# =============================================================================
# Token Creation Tests
# =============================================================================


class TestCreateAccessToken:
    """Tests for create_access_token."""

    def test_round_trips_identity(self):
        """Should decode back to the same caller."""
        token = create_access_token("65f0c0ffee0000000000beef", is_admin=True)

        assert decode_token(token) == Caller(
            user_id="65f0c0ffee0000000000beef", is_admin=True
        )

    def test_payload_shape(self):
        """Should carry id, is_admin and exp."""
        token = create_access_token("user-1")

        claims = jwt.get_unverified_claims(token)
        assert claims["id"] == "user-1"
        assert claims["is_admin"] is False
        assert "exp" in claims

    @freeze_time("2024-01-01 12:00:00")
    def test_default_lifetime(self, settings):
        """Should expire after the configured number of minutes."""
        token = create_access_token("user-1")

        claims = jwt.get_unverified_claims(token)
        expected = datetime(2024, 1, 1, 12, 0, tzinfo=UTC) + timedelta(
            minutes=settings.auth.jwt.access_token_expire_minutes
        )
        assert claims["exp"] == int(expected.timestamp())


# =============================================================================
# Token Decoding Tests
# =============================================================================


class TestDecodeToken:
    """Tests for decode_token."""

    @freeze_time("2024-01-01 12:00:00")
    def test_expired(self):
        """Should raise TokenExpiredError once the token has expired."""
        token = create_access_token("user-1", expires_delta=timedelta(minutes=1))

        with freeze_time("2024-01-01 12:02:00"), pytest.raises(
            TokenExpiredError, match="Token expired"
        ):
            decode_token(token)

    def test_wrong_signature(self):
        """Should raise TokenInvalidError for a foreign secret."""
        token = _sign({"id": "user-1"}, secret="another-secret-of-sufficient-length!!")

        with pytest.raises(TokenInvalidError, match="Invalid token"):
            decode_token(token)

    @pytest.mark.parametrize("token", ["", "not.a.jwt", "garbage"])
    def test_malformed(self, token):
        """Should raise TokenInvalidError for malformed tokens."""
        with pytest.raises(TokenInvalidError):
            decode_token(token)

    def test_missing_identity(self):
        """Should reject a signed token without a user id."""
        with pytest.raises(TokenInvalidError):
            decode_token(_sign({"is_admin": True}))

    def test_legacy_claims(self):
        """Should accept userId/isAdmin tokens."""
        caller = decode_token(_sign({"userId": "user-2", "isAdmin": True}))

        assert caller == Caller(user_id="user-2", is_admin=True)


class TestCallerFromClaims:
    """Tests for caller_from_claims."""

    @pytest.mark.parametrize(
        ("claims", "expected"),
        [
            ({"id": "a"}, Caller(user_id="a")),
            ({"userId": "a"}, Caller(user_id="a")),
            ({"id": "a", "userId": "b"}, Caller(user_id="a")),
            ({"id": "a", "is_admin": True}, Caller(user_id="a", is_admin=True)),
            ({"id": "a", "isAdmin": True}, Caller(user_id="a", is_admin=True)),
            ({"id": "a", "is_admin": False, "isAdmin": True}, Caller(user_id="a")),
        ],
    )
    def test_normalizes(self, claims, expected):
        """Should prefer current spellings and fall back to legacy ones."""
        assert caller_from_claims(claims) == expected

    @pytest.mark.parametrize("flag", ["true", 1, "yes"])
    def test_admin_flag_must_be_boolean_true(self, flag):
        """Should not treat truthy non-boolean values as admin."""
        assert caller_from_claims({"id": "a", "is_admin": flag}).is_admin is False

    @pytest.mark.parametrize("claims", [{}, {"id": ""}, {"userId": None}])
    def test_missing_id(self, claims):
        """Should raise TokenInvalidError."""
        with pytest.raises(TokenInvalidError):
            caller_from_claims(claims)
