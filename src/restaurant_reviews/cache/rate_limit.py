"""Rate limiting using SlowAPI.

Only the authentication endpoints are limited, per client IP, and only
failed attempts count: a response with a status of 400 or above, or an
exception raised by the endpoint, uses up the allowance, while successful
logins and registrations never do. Once the allowance is spent every request
from that IP is rejected until the window resets. The storage backend comes
from ``rate_limiting.storage_uri`` (``memory://`` by default, any URI the
``limits`` package understands otherwise).
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from slowapi.wrappers import Limit, LimitGroup
from starlette.responses import Response

from restaurant_reviews.core.config import get_settings
from restaurant_reviews.core.exceptions import ErrorResponse
from restaurant_reviews.core.middleware.request_id import get_request_id
from restaurant_reviews.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)

AUTH_LIMIT_SCOPE = "auth"


def _get_auth_rate_limit_key(request: Request) -> str:
    """Rate limit key for auth endpoints: always the client IP."""
    return f"auth:{get_remote_address(request)}"


def create_limiter() -> Limiter:
    """Create and configure the rate limiter."""
    settings = get_settings()

    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
    )


# Global limiter instance
limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a rate limit violation in the standard error envelope."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    return ORJSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=ErrorResponse(
            error="RATE_LIMIT_EXCEEDED",
            message="Too many attempts, please try again later",
            request_id=get_request_id(request),
        ).model_dump(),
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter and its exception handler to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info("Rate limiting configured")


def _auth_limits() -> list[Limit]:
    """Limits for the auth endpoints, read from settings on every request."""
    settings = get_settings()
    return list(
        LimitGroup(
            settings.rate_limiting.auth,
            _get_auth_rate_limit_key,
            AUTH_LIMIT_SCOPE,
            False,
            None,
            None,
            None,
            1,
            True,
        )
    )


def check_failed_attempts(request: Request) -> None:
    """Reject the request if its IP has used up the failed attempt allowance.

    Raises:
        RateLimitExceeded: If any auth limit is exhausted.
    """
    key = _get_auth_rate_limit_key(request)
    for limit in _auth_limits():
        if not limiter.limiter.test(limit.limit, key, AUTH_LIMIT_SCOPE):
            raise RateLimitExceeded(limit)


def record_failed_attempt(request: Request) -> None:
    """Count one failed attempt against every auth limit of the request's IP."""
    key = _get_auth_rate_limit_key(request)
    for limit in _auth_limits():
        limiter.limiter.hit(limit.limit, key, AUTH_LIMIT_SCOPE)
    logger.debug("Failed auth attempt counted", rate_limit_key=key)


def rate_limit_auth() -> Any:
    """Apply the auth rate limit (IP based, failed attempts only).

    The decorated endpoint must accept a ``request`` argument.

    Example:
        @router.post("/login")
        @rate_limit_auth()
        async def login(request: Request, ...):
            ...
    """

    def decorator(
        func: Callable[..., Awaitable[Any]],
    ) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Request = kwargs["request"]
            if not limiter.enabled:
                return await func(*args, **kwargs)

            check_failed_attempts(request)
            try:
                response = await func(*args, **kwargs)
            except Exception:
                record_failed_attempt(request)
                raise

            if isinstance(response, Response) and response.status_code >= 400:
                record_failed_attempt(request)
            return response

        return wrapper

    return decorator
