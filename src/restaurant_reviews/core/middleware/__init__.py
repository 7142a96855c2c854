"""HTTP middleware for the FastAPI application."""

from restaurant_reviews.core.middleware.logging import LoggingMiddleware
from restaurant_reviews.core.middleware.request_id import RequestIDMiddleware


__all__ = ["LoggingMiddleware", "RequestIDMiddleware"]
