"""Nominatim geocoding client.

Resolves a restaurant address to coordinates. When the full address yields
nothing, one retry is made with a simplified query: the last two
comma-separated parts, or for a single-part address the postal code plus the
last word.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from restaurant_reviews.clients.geocoding.exceptions import GeocodingError
from restaurant_reviews.clients.geocoding.models import NominatimPlace
from restaurant_reviews.observability.logging import get_logger


if TYPE_CHECKING:
    from restaurant_reviews.core.config.settings import GeocodingSettings

logger = get_logger(__name__)

_POSTAL_CODE: Final = re.compile(r"\b\d{4,5}\b")
_WHITESPACE: Final = re.compile(r"\s+")


def simplify_address(address: str) -> str:
    """Build the fallback query for an address that geocoded to nothing."""
    parts = [part.strip() for part in address.split(",") if part.strip()]
    if len(parts) > 1:
        return ", ".join(parts[-2:])

    postal_code = _POSTAL_CODE.search(address)
    if postal_code:
        last_word = address.split()[-1]
        return f"{postal_code.group(0)} {last_word}"

    return address


class GeocodingClient:
    """Client for the Nominatim ``/search`` endpoint."""

    SEARCH_ENDPOINT: Final[str] = "/search"

    def __init__(
        self,
        settings: GeocodingSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Base URL, User-Agent and timeout.
            http_client: HTTP client for API requests.
        """
        self._settings = settings
        self._http = http_client
        self._owns_http_client = http_client is None

    async def initialize(self) -> None:
        """Initialize the HTTP client if not provided."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._settings.url,
                timeout=self._settings.timeout,
                headers={
                    "User-Agent": self._settings.user_agent,
                    "Accept-Language": self._settings.accept_language,
                },
            )
        logger.info("GeocodingClient initialized", url=self._settings.url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.info("GeocodingClient shutdown")

    async def geocode(self, address: str) -> tuple[float, float]:
        """Return ``(lat, lng)`` for an address.

        Raises:
            GeocodingError: Empty address, upstream failure, no match even
                after the simplified retry, or unusable coordinates.
        """
        if not address or not address.strip():
            msg = "Address is required for geocoding"
            raise GeocodingError(msg)

        clean = _WHITESPACE.sub(" ", address.strip())

        place = await self._search(clean, detailed=True)
        if place is None:
            retry_query = simplify_address(clean)
            logger.debug("Retrying geocoding with simplified query", query=retry_query)
            place = await self._search(retry_query, detailed=False)

        if place is None:
            msg = (
                f'No coordinates found for the given address: "{address}". '
                "Please verify the address is correct."
            )
            raise GeocodingError(msg, address=address)

        lat, lng = place.lat, place.lon
        if math.isnan(lat) or math.isnan(lng):
            msg = "Invalid coordinates returned from geocoding service"
            raise GeocodingError(msg, address=address)

        return lat, lng

    async def _search(self, query: str, *, detailed: bool) -> NominatimPlace | None:
        if self._http is None:
            msg = "GeocodingClient not initialized"
            raise RuntimeError(msg)

        params = {"q": query, "format": "json", "limit": "1"}
        if detailed:
            params.update({"addressdetails": "1", "extratags": "1"})

        try:
            response = await self._http.get(self.SEARCH_ENDPOINT, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Geocoding API returned an error",
                status_code=e.response.status_code,
            )
            msg = f"Geocoding API error: {e.response.reason_phrase}"
            raise GeocodingError(msg, address=query) from e
        except httpx.HTTPError as e:
            logger.warning("Geocoding API request failed", error=str(e))
            msg = "Geocoding service unavailable"
            raise GeocodingError(msg, address=query) from e

        if not isinstance(data, list) or not data:
            return None

        try:
            return NominatimPlace.model_validate(data[0])
        except ValidationError as e:
            msg = "Invalid coordinates returned from geocoding service"
            raise GeocodingError(msg, address=query) from e
