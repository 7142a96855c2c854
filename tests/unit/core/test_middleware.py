"""Unit tests for the HTTP middleware.

Tests cover:
- Request ID generation, validation, propagation and logging context
- Request logging and the X-Process-Time header
- Excluded paths
- Client IP extraction behind proxies
"""

from __future__ import annotations

import re
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from restaurant_reviews.core.middleware import LoggingMiddleware, RequestIDMiddleware
from restaurant_reviews.core.middleware.request_id import (
    accept_request_id,
    get_request_id,
    new_request_id,
)


pytestmark = pytest.mark.unit


def _request(path: str = "/api/v1/restaurants", headers: dict | None = None) -> MagicMock:
    request = MagicMock()
    request.headers = headers or {}
    request.url.path = path
    request.method = "GET"
    request.query_params = {}
    request.client.host = "10.0.0.9"
    return request


def _call_next(status_code: int = 200) -> AsyncMock:
    response = MagicMock()
    response.headers = {}
    response.status_code = status_code
    return AsyncMock(return_value=response)


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    async def test_generates_request_id(self) -> None:
        """Should create an id when the header is missing."""
        request = _request()

        with patch("restaurant_reviews.core.middleware.request_id.bind_context") as bind:
            response = await RequestIDMiddleware(MagicMock()).dispatch(
                request, _call_next()
            )

        request_id = response.headers["X-Request-ID"]
        assert request_id
        assert request.state.request_id == request_id
        bind.assert_called_once_with(request_id=request_id)

    async def test_propagates_request_id(self) -> None:
        """Should reuse the caller's id."""
        request = _request(headers={"X-Request-ID": "abc-123"})

        response = await RequestIDMiddleware(MagicMock()).dispatch(request, _call_next())

        assert response.headers["X-Request-ID"] == "abc-123"

    async def test_clears_previous_context(self) -> None:
        """Should start each request with an empty logging context."""
        with patch(
            "restaurant_reviews.core.middleware.request_id.clear_context"
        ) as clear:
            await RequestIDMiddleware(MagicMock()).dispatch(_request(), _call_next())

        clear.assert_called_once()

    @pytest.mark.parametrize(
        "supplied",
        ["bad id\nforged log line", "x" * 65, "-leading-dash", "ümlaut"],
        ids=["control-chars", "too-long", "leading-dash", "non-ascii"],
    )
    async def test_replaces_malformed_request_id(self, supplied) -> None:
        """Should not echo an unsafe client id."""
        request = _request(headers={"X-Request-ID": supplied})

        response = await RequestIDMiddleware(MagicMock()).dispatch(request, _call_next())

        request_id = response.headers["X-Request-ID"]
        assert request_id != supplied
        assert re.fullmatch(r"[0-9a-f]{32}", request_id)
        assert request.state.request_id == request_id


class TestRequestIDHelpers:
    """Tests for the request id helper functions."""

    @pytest.mark.parametrize(
        ("candidate", "expected"),
        [
            ("abc-123", "abc-123"),
            ("trace.id:42_a", "trace.id:42_a"),
            ("a" * 64, "a" * 64),
            ("a" * 65, None),
            ("", None),
            (None, None),
            ("two words", None),
        ],
    )
    def test_accept_request_id(self, candidate, expected) -> None:
        """Should keep only short safe tokens."""
        assert accept_request_id(candidate) == expected

    def test_new_request_ids_are_unique_hex(self) -> None:
        """Should generate distinct 32 character hex ids."""
        first, second = new_request_id(), new_request_id()

        assert first != second
        assert re.fullmatch(r"[0-9a-f]{32}", first)

    def test_get_request_id(self) -> None:
        """Should read the id from request state, None when unset."""
        request = MagicMock()
        request.state = SimpleNamespace(request_id="abc-123")

        assert get_request_id(request) == "abc-123"
        request.state = SimpleNamespace()
        assert get_request_id(request) is None


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    async def test_logs_and_times_request(self) -> None:
        """Should log start and completion and add X-Process-Time."""
        middleware = LoggingMiddleware(MagicMock())

        with patch("restaurant_reviews.core.middleware.logging.logger") as log:
            response = await middleware.dispatch(_request(), _call_next(201))

        messages = [c.args[0] for c in log.info.call_args_list]
        assert messages == ["Request started", "Request completed"]
        assert log.info.call_args_list[1].kwargs["status_code"] == 201
        assert float(response.headers["X-Process-Time"]) >= 0

    async def test_excluded_path_is_not_logged(self) -> None:
        """Should skip logging but still time excluded paths."""
        middleware = LoggingMiddleware(MagicMock(), exclude_paths={"/api/v1/health"})

        with patch("restaurant_reviews.core.middleware.logging.logger") as log:
            response = await middleware.dispatch(
                _request("/api/v1/health"), _call_next()
            )

        log.info.assert_not_called()
        assert "X-Process-Time" in response.headers

    @pytest.mark.parametrize(
        ("headers", "expected"),
        [
            ({"x-forwarded-for": "1.1.1.1, 2.2.2.2"}, "1.1.1.1"),
            ({"x-real-ip": "3.3.3.3"}, "3.3.3.3"),
            ({}, "10.0.0.9"),
        ],
    )
    def test_client_ip(self, headers, expected) -> None:
        """Should prefer proxy headers over the socket address."""
        assert LoggingMiddleware._get_client_ip(_request(headers=headers)) == expected
