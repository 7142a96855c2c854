"""Restaurant directory."""

from restaurant_reviews.services.restaurants.exceptions import (
    InvalidRestaurantError,
    RestaurantNotFoundError,
)
from restaurant_reviews.services.restaurants.service import RestaurantService


__all__ = ["InvalidRestaurantError", "RestaurantNotFoundError", "RestaurantService"]
