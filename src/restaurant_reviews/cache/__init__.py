"""Rate limiting for the authentication endpoints."""

from restaurant_reviews.cache.rate_limit import (
    limiter,
    rate_limit_auth,
    rate_limit_exceeded_handler,
    setup_rate_limiting,
)


__all__ = [
    "limiter",
    "rate_limit_auth",
    "rate_limit_exceeded_handler",
    "setup_rate_limiting",
]
