"""FastAPI security dependencies.

``get_current_caller`` verifies the bearer token. ``RequireAdmin`` and
``RequireOwnerOrAdmin`` resolve the access request for a route and apply
``decide``; a denial becomes a 401 or 403 response.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from restaurant_reviews.api.dependencies import get_review_store
from restaurant_reviews.auth.decision import (
    AccessRequest,
    Decision,
    Outcome,
    Policy,
    TargetReference,
    decide,
    resolve_target_owner,
)
from restaurant_reviews.auth.exceptions import (
    ResourceNotFoundError,
    TokenExpiredError,
    TokenInvalidError,
)
from restaurant_reviews.auth.jwt import Caller, decode_token
from restaurant_reviews.core.exceptions import (
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from restaurant_reviews.database.repositories.protocol import ReviewStore
from restaurant_reviews.observability.logging import bind_context, get_logger


logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    scheme_name="JWT",
    description="JWT Bearer token authentication",
    auto_error=False,
)


async def get_current_caller(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Caller:
    """Verify the bearer token and return the caller.

    Raises:
        UnauthorizedException: Missing, malformed, invalid or expired token.
    """
    if not token:
        raise UnauthorizedException

    try:
        caller = decode_token(token)
    except TokenExpiredError:
        raise UnauthorizedException("Token expired") from None
    except TokenInvalidError:
        raise UnauthorizedException("Invalid token") from None

    bind_context(caller_id=caller.user_id)
    return caller


CurrentCaller = Annotated[Caller, Depends(get_current_caller)]


def enforce(decision: Decision) -> None:
    """Raise the HTTP error matching a denied decision."""
    if decision.outcome is Outcome.ALLOW:
        return
    if decision.outcome is Outcome.UNAUTHORIZED:
        raise UnauthorizedException(decision.message)
    logger.info("Access denied", reason=decision.message)
    raise ForbiddenException(decision.message)


class RequireAdmin:
    """Dependency that only lets admins through.

    Example:
        @router.get("/users", dependencies=[Depends(RequireAdmin())])
    """

    async def __call__(self, caller: CurrentCaller) -> Caller:
        enforce(decide(caller, AccessRequest(policy=Policy.ADMIN)))
        return caller


class RequireOwnerOrAdmin:
    """Dependency that lets admins and the owner of the target through.

    Each route names where its target's owner is found. Candidates are
    consulted in a fixed order: body user id, path user id, review owner.

    Args:
        body_field: JSON body field holding a user id.
        path_param: Path parameter holding a user id.
        review_param: Path parameter holding a review id.
    """

    def __init__(
        self,
        *,
        body_field: str | None = None,
        path_param: str | None = None,
        review_param: str | None = None,
    ) -> None:
        self.body_field = body_field
        self.path_param = path_param
        self.review_param = review_param

    async def __call__(
        self,
        request: Request,
        caller: CurrentCaller,
        reviews: Annotated[ReviewStore, Depends(get_review_store)],
    ) -> Caller:
        target = TargetReference(
            body_user_id=await self._body_value(request),
            path_user_id=self._path_value(request, self.path_param),
            review_id=self._path_value(request, self.review_param),
        )

        try:
            owner_id = await resolve_target_owner(target, reviews)
        except ResourceNotFoundError as e:
            raise NotFoundException(str(e)) from None

        enforce(
            decide(caller, AccessRequest(policy=Policy.OWNER_OR_ADMIN, owner_id=owner_id))
        )
        return caller

    @staticmethod
    def _path_value(request: Request, name: str | None) -> str | None:
        if name is None:
            return None
        return request.path_params.get(name)

    async def _body_value(self, request: Request) -> str | None:
        if self.body_field is None:
            return None
        try:
            body: Any = await request.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        value = body.get(self.body_field)
        return str(value) if value else None
