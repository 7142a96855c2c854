"""Request logging middleware.

Logs one line when a request starts and one when it completes, with the
status code and elapsed time. The elapsed time is also returned in the
``X-Process-Time`` header (milliseconds).
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from restaurant_reviews.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for structured request/response logging."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()

        if request.url.path in self.exclude_paths:
            response = await call_next(request)
            response.headers["X-Process-Time"] = self._elapsed_ms(start)
            return response

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        response = await call_next(request)

        elapsed = self._elapsed_ms(start)
        response.headers["X-Process-Time"] = elapsed
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=float(elapsed),
        )
        return response

    @staticmethod
    def _elapsed_ms(start: float) -> str:
        return f"{(time.perf_counter() - start) * 1000:.2f}"

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Extract client IP from request, considering proxies."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
