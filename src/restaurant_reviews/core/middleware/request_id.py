"""Request correlation ids.

Every request gets an id that appears in its log lines, in the
``request_id`` field of error bodies and in the ``X-Request-ID`` response
header. A client may supply its own id through the same header; it is kept
only if it is a short token of letters, digits and ``._:-``, since it is
echoed into logs and responses. Anything else is replaced by a fresh id.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from restaurant_reviews.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
)


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9][A-Za-z0-9._:-]{0,63}")


def new_request_id() -> str:
    return uuid.uuid4().hex


def accept_request_id(candidate: str | None) -> str | None:
    """Return ``candidate`` if it is usable as a correlation id, else None."""
    if candidate and _VALID_REQUEST_ID.fullmatch(candidate):
        return candidate
    return None


def get_request_id(request: Request) -> str | None:
    """Correlation id of ``request``, None outside the middleware."""
    return getattr(request.state, "request_id", None)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a correlation id to every request and response."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()

        supplied = request.headers.get(self.header_name)
        request_id = accept_request_id(supplied)
        if request_id is None:
            request_id = new_request_id()
            if supplied:
                logger.debug(
                    "Replaced malformed client request id",
                    request_id=request_id,
                    supplied_length=len(supplied),
                )

        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
