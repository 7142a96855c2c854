"""Restaurant service.

Provides methods for:
- Public listing with search, filters and sorting
- Top rated and name lookups
- Creation (geocoding the address when no coordinates are given)
- Admin updates and cascading deletes
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from restaurant_reviews.clients.geocoding import GeocodingError
from restaurant_reviews.database.identifiers import is_valid_object_id
from restaurant_reviews.observability.logging import get_logger
from restaurant_reviews.schemas.restaurant import RestaurantSortField, SortOrder
from restaurant_reviews.services.restaurants.exceptions import (
    InvalidRestaurantError,
    RestaurantNotFoundError,
)


if TYPE_CHECKING:
    from restaurant_reviews.clients.geocoding import GeocodingClient
    from restaurant_reviews.database.models import RestaurantRecord
    from restaurant_reviews.database.repositories.protocol import (
        RestaurantStore,
        ReviewStore,
        UserStore,
    )
    from restaurant_reviews.schemas.restaurant import (
        RestaurantCreateRequest,
        RestaurantUpdateRequest,
    )

logger = get_logger(__name__)

TOP_RATED_LIMIT = 10


def _check_id(restaurant_id: str) -> None:
    if not is_valid_object_id(restaurant_id):
        msg = "Invalid restaurant ID format"
        raise InvalidRestaurantError(msg)


class RestaurantService:
    """Reads and maintains restaurants.

    Rating fields are owned by the rating aggregation service and are never
    written here except for their initial zero values.
    """

    def __init__(
        self,
        restaurants: RestaurantStore,
        reviews: ReviewStore,
        users: UserStore,
        geocoder: GeocodingClient | None = None,
    ) -> None:
        self._restaurants = restaurants
        self._reviews = reviews
        self._users = users
        self._geocoder = geocoder

    async def list_restaurants(
        self,
        *,
        search: str | None = None,
        cuisine: str | None = None,
        neighborhood: str | None = None,
        sort_by: RestaurantSortField = RestaurantSortField.NAME,
        order: SortOrder = SortOrder.ASC,
    ) -> list[RestaurantRecord]:
        return await self._restaurants.find_many(
            name_contains=search,
            cuisine_type=cuisine,
            neighborhood=neighborhood,
            sort_by=RestaurantSortField(sort_by).value,
            descending=SortOrder(order) is SortOrder.DESC,
        )

    async def top_rated(self, limit: int = TOP_RATED_LIMIT) -> list[RestaurantRecord]:
        """Best rated restaurants, highest ``average_rating`` first."""
        return await self._restaurants.find_many(
            sort_by=RestaurantSortField.AVERAGE_RATING.value,
            descending=True,
            limit=limit,
        )

    async def search_by_name(self, name: str) -> list[RestaurantRecord]:
        return await self._restaurants.find_many(name_contains=name)

    async def get(self, restaurant_id: str) -> RestaurantRecord:
        """Fetch one restaurant.

        Raises:
            InvalidRestaurantError: Malformed id.
            RestaurantNotFoundError: No such restaurant.
        """
        _check_id(restaurant_id)
        restaurant = await self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant

    async def create(self, data: RestaurantCreateRequest) -> RestaurantRecord:
        """Create a restaurant with zeroed rating fields.

        Raises:
            InvalidRestaurantError: No coordinates given and the address
                cannot be geocoded.
        """
        fields = data.model_dump(mode="json", exclude_none=True)

        if data.latlng is None:
            fields["latlng"] = await self._geocode(data.address)

        restaurant = await self._restaurants.create(fields)
        logger.info("Restaurant created", restaurant_id=restaurant.id, name=restaurant.name)
        return restaurant

    async def update(
        self, restaurant_id: str, data: RestaurantUpdateRequest
    ) -> RestaurantRecord:
        """Partially update a restaurant's descriptive fields.

        Raises:
            InvalidRestaurantError: Malformed id.
            RestaurantNotFoundError: No such restaurant.
        """
        _check_id(restaurant_id)
        changes = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            return await self.get(restaurant_id)

        restaurant = await self._restaurants.update_by_id(restaurant_id, changes)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)

        logger.info("Restaurant updated", restaurant_id=restaurant_id, fields=sorted(changes))
        return restaurant

    async def delete(self, restaurant_id: str) -> RestaurantRecord:
        """Delete a restaurant, its reviews and every favourite pointing at it.

        Raises:
            InvalidRestaurantError: Malformed id.
            RestaurantNotFoundError: No such restaurant.
        """
        _check_id(restaurant_id)
        restaurant = await self._restaurants.delete_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)

        reviews_deleted = await self._reviews.delete_all_for_restaurant(restaurant_id)
        favourites_removed = await self._users.remove_favourite_everywhere(restaurant_id)

        logger.info(
            "Restaurant deleted",
            restaurant_id=restaurant_id,
            reviews_deleted=reviews_deleted,
            favourites_removed=favourites_removed,
        )
        return restaurant

    async def _geocode(self, address: str) -> dict[str, float]:
        if self._geocoder is None:
            msg = "Coordinates are required when geocoding is unavailable"
            raise InvalidRestaurantError(msg)
        try:
            lat, lng = await self._geocoder.geocode(address)
        except GeocodingError as e:
            raise InvalidRestaurantError(str(e)) from e
        return {"lat": lat, "lng": lng}
