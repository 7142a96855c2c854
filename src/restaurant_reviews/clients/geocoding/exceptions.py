"""Exceptions for the geocoding client."""

from __future__ import annotations


class GeocodingError(Exception):
    """Raised when an address cannot be turned into coordinates."""

    def __init__(self, message: str, address: str | None = None) -> None:
        self.address = address
        super().__init__(message)
