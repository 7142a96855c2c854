"""Request and response schemas for the REST API."""

from restaurant_reviews.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from restaurant_reviews.schemas.base import (
    APIRequest,
    APIResponse,
    DownstreamResponse,
    MessageResponse,
)
from restaurant_reviews.schemas.restaurant import (
    LatLng,
    RestaurantCreateRequest,
    RestaurantResponse,
    RestaurantSortField,
    RestaurantUpdateRequest,
    SortOrder,
)
from restaurant_reviews.schemas.review import (
    RestaurantReviewResponse,
    ReviewCreateRequest,
    ReviewDeletedResponse,
    ReviewResponse,
    ReviewUpdateRequest,
    UserReviewResponse,
)
from restaurant_reviews.schemas.user import (
    FavouriteRequest,
    FavouritesResponse,
    UserResponse,
    UserUpdateRequest,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "DownstreamResponse",
    "FavouriteRequest",
    "FavouritesResponse",
    "LatLng",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RestaurantCreateRequest",
    "RestaurantResponse",
    "RestaurantReviewResponse",
    "RestaurantSortField",
    "RestaurantUpdateRequest",
    "ReviewCreateRequest",
    "ReviewDeletedResponse",
    "ReviewResponse",
    "ReviewUpdateRequest",
    "SortOrder",
    "UserResponse",
    "UserReviewResponse",
    "UserUpdateRequest",
]
