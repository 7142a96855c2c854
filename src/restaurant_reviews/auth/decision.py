"""Authorization decisions.

Three policies gate the API:

- ``AUTHENTICATED``: any verified caller.
- ``ADMIN``: callers whose token carries the admin flag.
- ``OWNER_OR_ADMIN``: admins, or the caller who owns the target resource.

``decide`` is a pure function of the caller and the resolved request and
returns a ``Decision`` instead of raising, so it can be tested without any
framework. Finding the owner of a target is the only step that touches a
store and lives in ``resolve_target_owner``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from restaurant_reviews.auth.exceptions import ResourceNotFoundError
from restaurant_reviews.database.identifiers import normalize_id


if TYPE_CHECKING:
    from restaurant_reviews.auth.jwt import Caller
    from restaurant_reviews.database.repositories.protocol import ReviewStore


NOT_AUTHORIZED_MESSAGE = "Not Authorized"
ADMIN_REQUIRED_MESSAGE = "Admin privileges required"
OWNERSHIP_REQUIRED_MESSAGE = "You can only modify your own resources"
RESOURCE_NOT_FOUND_MESSAGE = "Resource not found"


class Policy(StrEnum):
    """Access policies attached to routes."""

    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    OWNER_OR_ADMIN = "owner_or_admin"


class Outcome(StrEnum):
    """Result tag of a decision."""

    ALLOW = "allow"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


class TargetReference(BaseModel):
    """Where the owner of a targeted resource can be found.

    Candidates are consulted in order: ``body_user_id``, ``path_user_id``,
    then the owner of ``review_id``.
    """

    model_config = ConfigDict(frozen=True)

    body_user_id: str | None = None
    path_user_id: str | None = None
    review_id: str | None = None


class AccessRequest(BaseModel):
    """A policy together with the already-resolved owner of the target."""

    model_config = ConfigDict(frozen=True)

    policy: Policy
    owner_id: str | None = None


class Decision(BaseModel):
    """Outcome of an authorization check."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    message: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


ALLOW = Decision(outcome=Outcome.ALLOW)


def decide(caller: Caller | None, request: AccessRequest) -> Decision:
    """Decide whether ``caller`` may perform ``request``."""
    if caller is None or not caller.user_id:
        return Decision(outcome=Outcome.UNAUTHORIZED, message=NOT_AUTHORIZED_MESSAGE)

    if request.policy is Policy.AUTHENTICATED:
        return ALLOW

    if caller.is_admin:
        return ALLOW

    if request.policy is Policy.ADMIN:
        return Decision(outcome=Outcome.FORBIDDEN, message=ADMIN_REQUIRED_MESSAGE)

    if request.owner_id is not None and normalize_id(caller.user_id) == normalize_id(
        request.owner_id
    ):
        return ALLOW

    return Decision(outcome=Outcome.FORBIDDEN, message=OWNERSHIP_REQUIRED_MESSAGE)


async def resolve_target_owner(
    target: TargetReference,
    reviews: ReviewStore,
) -> str | None:
    """Find the owner id of the targeted resource.

    Returns None when the target names no owner at all. Store errors
    propagate unchanged.

    Raises:
        ResourceNotFoundError: If the referenced review does not exist.
    """
    if target.body_user_id:
        return target.body_user_id
    if target.path_user_id:
        return target.path_user_id
    if target.review_id:
        review = await reviews.find_by_id(target.review_id)
        if review is None:
            raise ResourceNotFoundError(RESOURCE_NOT_FOUND_MESSAGE)
        return review.user
    return None
