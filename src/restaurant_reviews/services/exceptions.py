"""Base exceptions shared by the service packages.

Endpoints translate these families into HTTP errors; the concrete classes
live next to the service that raises them.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Input passed schema validation but is not acceptable."""


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""


class ConflictError(ServiceError):
    """The operation would violate a uniqueness rule."""
