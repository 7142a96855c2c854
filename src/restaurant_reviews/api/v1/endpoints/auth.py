"""Registration and login endpoints.

Failed attempts on both are rate limited per client IP. Annotations stay
unpostponed here: the rate limit wrapper is what FastAPI inspects, and it
cannot resolve string annotations against this module.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from restaurant_reviews.api.dependencies import get_user_service
from restaurant_reviews.api.errors import to_http_error
from restaurant_reviews.cache.rate_limit import rate_limit_auth
from restaurant_reviews.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from restaurant_reviews.schemas.user import UserResponse
from restaurant_reviews.services.exceptions import ServiceError
from restaurant_reviews.services.users.service import UserService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@rate_limit_auth()
async def register(
    request: Request,
    data: RegisterRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> RegisterResponse:
    try:
        user = await users.register(data)
    except ServiceError as e:
        raise to_http_error(e) from None

    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in and obtain a bearer token",
)
@rate_limit_auth()
async def login(
    request: Request,
    data: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> LoginResponse:
    try:
        user, token = await users.login(data.email, data.password)
    except ServiceError as e:
        raise to_http_error(e) from None

    return LoginResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=token,
    )
