"""Authentication and authorization exceptions.

These are caught by the dependency layer and converted to HTTP responses.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base exception for auth errors."""


class TokenError(AuthError):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is malformed, unsigned or lacks an identity."""


class ResourceNotFoundError(AuthError):
    """Raised when the resource whose owner must be resolved does not exist."""
