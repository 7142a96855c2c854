"""Repositories implementing the store interfaces on MongoDB."""

from restaurant_reviews.database.repositories.protocol import (
    RestaurantStore,
    ReviewStore,
    UserStore,
)
from restaurant_reviews.database.repositories.restaurants import RestaurantRepository
from restaurant_reviews.database.repositories.reviews import ReviewRepository
from restaurant_reviews.database.repositories.users import UserRepository


__all__ = [
    "RestaurantRepository",
    "RestaurantStore",
    "ReviewRepository",
    "ReviewStore",
    "UserRepository",
    "UserStore",
]
