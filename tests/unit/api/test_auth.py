"""Unit tests for the registration and login endpoints.

Tests cover:
- Registration responses never exposing credentials
- Duplicate and invalid registrations
- Login issuing a usable bearer token
- Uniform error for bad credentials
"""

from __future__ import annotations

import pytest

from restaurant_reviews.auth.jwt import decode_token


pytestmark = pytest.mark.unit

REGISTRATION = {
    "username": "carol",
    "email": "carol@example.com",
    "password": "s3cret!pass",
    "first_name": "Carol",
    "last_name": "Tester",
}


class TestRegister:
    """Tests for POST /auth/register."""

    async def test_creates_user(self, client) -> None:
        """Should return 201 with the public user view."""
        response = await client.post("/auth/register", json=REGISTRATION)

        body = response.json()
        assert response.status_code == 201
        assert body["message"] == "User registered successfully"
        assert body["user"]["username"] == "carol"
        assert "password" not in body["user"]
        assert "email" not in body["user"]
        assert "is_admin" not in body["user"]

    async def test_duplicate(self, client) -> None:
        """Should return 409 for a taken username or email."""
        await client.post("/auth/register", json=REGISTRATION)

        response = await client.post(
            "/auth/register", json={**REGISTRATION, "username": "carol2"}
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Username or email already exists"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"password": "password"},
            {"email": "not-an-email"},
            {"username": "no spaces"},
        ],
        ids=["weak-password", "bad-email", "bad-username"],
    )
    async def test_invalid(self, client, overrides) -> None:
        """Should return 422 with the validation envelope."""
        response = await client.post("/auth/register", json={**REGISTRATION, **overrides})

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_admin_flag_ignored(self, client, user_store) -> None:
        """Should not let a caller register as admin."""
        response = await client.post(
            "/auth/register", json={**REGISTRATION, "is_admin": True}
        )

        stored = await user_store.find_by_id(response.json()["user"]["id"])
        assert stored.is_admin is False


class TestLogin:
    """Tests for POST /auth/login."""

    async def test_returns_token(self, client) -> None:
        """Should return a token identifying the user."""
        registered = await client.post("/auth/register", json=REGISTRATION)

        response = await client.post(
            "/auth/login",
            json={"email": "Carol@Example.com", "password": REGISTRATION["password"]},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["message"] == "Login successful"
        assert decode_token(body["token"]).user_id == registered.json()["user"]["id"]

    @pytest.mark.parametrize(
        "credentials",
        [
            {"email": "carol@example.com", "password": "wrong!pass1"},
            {"email": "nobody@example.com", "password": "s3cret!pass"},
        ],
        ids=["wrong-password", "unknown-email"],
    )
    async def test_bad_credentials(self, client, credentials) -> None:
        """Should return the same 401 for either mistake."""
        await client.post("/auth/register", json=REGISTRATION)

        response = await client.post("/auth/login", json=credentials)

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestAuthRateLimit:
    """Tests for the failed attempt limit on the auth endpoints."""

    @pytest.fixture(autouse=True)
    def five_attempts(self, settings, monkeypatch) -> None:
        monkeypatch.setattr(settings.rate_limiting, "auth", "5/15minutes")

    async def test_successful_logins_never_limited(self, client) -> None:
        """Should keep accepting correct credentials past the allowance."""
        await client.post("/auth/register", json=REGISTRATION)
        credentials = {"email": "carol@example.com", "password": "s3cret!pass"}

        statuses = [
            (await client.post("/auth/login", json=credentials)).status_code
            for _ in range(7)
        ]

        assert statuses == [200] * 7

    async def test_failed_logins_limited(self, client) -> None:
        """Should answer 429 once five attempts have failed."""
        await client.post("/auth/register", json=REGISTRATION)
        wrong = {"email": "carol@example.com", "password": "wrong!pass1"}

        statuses = [
            (await client.post("/auth/login", json=wrong)).status_code
            for _ in range(6)
        ]

        assert statuses == [401] * 5 + [429]
        assert (await client.post("/auth/login", json=wrong)).json()["error"] == (
            "RATE_LIMIT_EXCEEDED"
        )

    async def test_correct_credentials_blocked_after_failures(self, client) -> None:
        """Should reject even a correct login once the allowance is spent."""
        await client.post("/auth/register", json=REGISTRATION)
        wrong = {"email": "carol@example.com", "password": "wrong!pass1"}
        for _ in range(5):
            await client.post("/auth/login", json=wrong)

        response = await client.post(
            "/auth/login",
            json={"email": "carol@example.com", "password": "s3cret!pass"},
        )

        assert response.status_code == 429

    async def test_successes_do_not_reset_failures(self, client) -> None:
        """Should keep counting failures across interleaved successes."""
        await client.post("/auth/register", json=REGISTRATION)
        right = {"email": "carol@example.com", "password": "s3cret!pass"}
        wrong = {"email": "carol@example.com", "password": "wrong!pass1"}

        statuses = []
        for _ in range(5):
            statuses.append((await client.post("/auth/login", json=wrong)).status_code)
            statuses.append((await client.post("/auth/login", json=right)).status_code)

        assert statuses[:-1] == [401, 200] * 4 + [401]
        assert statuses[-1] == 429
