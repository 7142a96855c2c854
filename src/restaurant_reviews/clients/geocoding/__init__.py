"""Address geocoding via Nominatim."""

from restaurant_reviews.clients.geocoding.client import GeocodingClient, simplify_address
from restaurant_reviews.clients.geocoding.exceptions import GeocodingError


__all__ = ["GeocodingClient", "GeocodingError", "simplify_address"]
