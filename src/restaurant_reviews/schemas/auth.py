"""Registration and login schemas."""

from __future__ import annotations

import re

from pydantic import EmailStr, Field, field_validator

from restaurant_reviews.schemas.base import APIRequest, APIResponse
from restaurant_reviews.schemas.user import USERNAME_PATTERN, UserResponse


_PASSWORD_PATTERN = re.compile(r"^(?=.*[0-9])(?=.*[!@#$%^&*])[A-Za-z0-9!@#$%^&*]+$")


class RegisterRequest(APIRequest):
    """Body of ``POST /auth/register``."""

    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_PATTERN.match(value):
            msg = "Password must include a number and a special character"
            raise ValueError(msg)
        return value


class LoginRequest(APIRequest):
    """Body of ``POST /auth/login``."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterResponse(APIResponse):
    """Registration confirmation."""

    message: str
    user: UserResponse


class LoginResponse(APIResponse):
    """Login confirmation with the bearer token."""

    message: str
    user: UserResponse
    token: str
