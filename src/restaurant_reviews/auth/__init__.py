"""Authentication and authorization.

Tokens are verified in ``jwt``; access decisions are made by the pure
``decide`` function in ``decision``; ``dependencies`` wires both into FastAPI.
"""

from restaurant_reviews.auth.decision import (
    AccessRequest,
    Decision,
    Outcome,
    Policy,
    TargetReference,
    decide,
    resolve_target_owner,
)
from restaurant_reviews.auth.jwt import Caller, create_access_token, decode_token


__all__ = [
    "AccessRequest",
    "Caller",
    "Decision",
    "Outcome",
    "Policy",
    "TargetReference",
    "create_access_token",
    "decide",
    "decode_token",
    "resolve_target_owner",
]
