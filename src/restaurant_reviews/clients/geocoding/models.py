"""Nominatim response models."""

from __future__ import annotations

from restaurant_reviews.schemas.base import DownstreamResponse


class NominatimPlace(DownstreamResponse):
    """One search hit. Nominatim sends coordinates as strings."""

    lat: float
    lon: float
    display_name: str | None = None
