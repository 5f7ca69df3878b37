"""Application service for restaurants, cities and gastronomic types."""

import logging
from typing import List, Optional

from guideresto.application.dtos import (
    ActionResult,
    CityDTO,
    CreateCityRequest,
    CreateRestaurantRequest,
    EditAddressRequest,
    EditRestaurantRequest,
    RestaurantDTO,
    RestaurantTypeDTO,
)
from guideresto.data.uow import UnitOfWork
from guideresto.domain.entities import City, Restaurant, RestaurantType
from guideresto.domain.value_objects import Localisation

from .base import ApplicationService

logger = logging.getLogger(__name__)


class RestaurantService(ApplicationService):
    """
    Use cases around the restaurant directory.

    Queries return DTOs (or None) and let mapping errors propagate;
    writes return an ActionResult whose ``value`` is the written DTO.
    """

    # ------------------------------------------------------------------ #
    # Restaurants
    # ------------------------------------------------------------------ #

    def get_restaurants(self) -> List[RestaurantDTO]:
        return self._query(lambda uow: [self._restaurant_to_dto(r) for r in uow.restaurants.find_all()])

    def get_restaurant(self, restaurant_id: int) -> Optional[RestaurantDTO]:
        return self._query(lambda uow: self._restaurant_to_dto(uow.restaurants.find_by_id(restaurant_id)))

    def get_restaurant_by_name(self, name: str) -> Optional[RestaurantDTO]:
        return self._query(lambda uow: self._restaurant_to_dto(uow.restaurants.find_by_name(name)))

    def find_restaurants_by_name(self, part: str) -> List[RestaurantDTO]:
        return self._query(
            lambda uow: [self._restaurant_to_dto(r) for r in uow.restaurants.find_by_name_like(part)]
        )

    def find_restaurants_by_city_name(self, part: str) -> List[RestaurantDTO]:
        return self._query(
            lambda uow: [self._restaurant_to_dto(r) for r in uow.restaurants.find_by_city_name(part)]
        )

    def find_restaurants_by_type_label(self, label: str) -> List[RestaurantDTO]:
        return self._query(
            lambda uow: [self._restaurant_to_dto(r) for r in uow.restaurants.find_by_type_label(label)]
        )

    def add_restaurant(self, request: CreateRestaurantRequest) -> ActionResult:
        """Create a restaurant in an existing city, with an existing type.

        Args:
            request: CreateRestaurantRequest DTO

        Returns:
            ActionResult with the created RestaurantDTO
        """
        def work(uow: UnitOfWork) -> RestaurantDTO:
            city = self._require(uow.cities.find_by_id(request.city_id), "City", request.city_id)
            restaurant_type = self._require(
                uow.restaurant_types.find_by_id(request.type_id), "RestaurantType", request.type_id
            )
            restaurant = Restaurant(
                name=request.name,
                description=request.description,
                website=request.website,
                address=Localisation(street=request.street, city=city),
                type=restaurant_type,
            )
            uow.restaurants.create(restaurant)
            return self._restaurant_to_dto(restaurant)

        return self._execute("add_restaurant", work)

    def edit_restaurant(self, request: EditRestaurantRequest) -> ActionResult:
        """Change name, description, website and type of a restaurant.

        A ``request.version`` older than the stored one yields a ConflictError result.
        """
        def work(uow: UnitOfWork) -> RestaurantDTO:
            restaurant = self._load_for_write(uow, request.restaurant_id, request.version)
            restaurant.type = self._require(
                uow.restaurant_types.find_by_id(request.type_id), "RestaurantType", request.type_id
            )
            restaurant.name = request.name
            restaurant.description = request.description
            restaurant.website = request.website
            uow.restaurants.update(restaurant)
            return self._restaurant_to_dto(restaurant)

        return self._execute("edit_restaurant", work)

    def edit_address(self, request: EditAddressRequest) -> ActionResult:
        def work(uow: UnitOfWork) -> RestaurantDTO:
            restaurant = self._load_for_write(uow, request.restaurant_id, request.version)
            city = self._require(uow.cities.find_by_id(request.city_id), "City", request.city_id)
            restaurant.relocate(request.street, city)
            uow.restaurants.update(restaurant)
            return self._restaurant_to_dto(restaurant)

        return self._execute("edit_address", work)

    def delete_restaurant(self, restaurant_id: int, version: Optional[int] = None) -> ActionResult:
        """Delete a restaurant with all its evaluations and grades.

        Args:
            restaurant_id: Restaurant number
            version: Version read by the caller, checked when given

        Returns:
            ActionResult whose value is True if a row was removed, False if absent
        """
        def work(uow: UnitOfWork) -> bool:
            restaurant = uow.restaurants.find_by_id(restaurant_id)
            if restaurant is None:
                return False
            if version is not None:
                restaurant.version = version
            return uow.restaurants.delete(restaurant)

        return self._execute("delete_restaurant", work)

    # ------------------------------------------------------------------ #
    # Cities and types
    # ------------------------------------------------------------------ #

    def get_cities(self) -> List[CityDTO]:
        return self._query(lambda uow: [self._city_to_dto(c) for c in uow.cities.find_all()])

    def get_city_by_zip_code(self, zip_code: str) -> Optional[CityDTO]:
        return self._query(lambda uow: self._city_to_dto(uow.cities.find_by_zip_code(zip_code)))

    def create_city(self, request: CreateCityRequest) -> ActionResult:
        def work(uow: UnitOfWork) -> CityDTO:
            city = uow.cities.create(City(zip_code=request.zip_code, city_name=request.city_name))
            return self._city_to_dto(city)

        return self._execute("create_city", work)

    def get_restaurant_types(self) -> List[RestaurantTypeDTO]:
        return self._query(lambda uow: [self._type_to_dto(t) for t in uow.restaurant_types.find_all()])

    def get_type_by_label(self, label: str) -> Optional[RestaurantTypeDTO]:
        return self._query(lambda uow: self._type_to_dto(uow.restaurant_types.find_by_label(label)))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _load_for_write(self, uow: UnitOfWork, restaurant_id: int, version: Optional[int]) -> Restaurant:
        restaurant = self._require(uow.restaurants.find_by_id(restaurant_id), "Restaurant", restaurant_id)
        if version is not None:
            restaurant.version = version
        return restaurant

    @staticmethod
    def _city_to_dto(city: Optional[City]) -> Optional[CityDTO]:
        if city is None:
            return None
        return CityDTO(id=city.id, zip_code=city.zip_code, city_name=city.city_name)

    @staticmethod
    def _type_to_dto(restaurant_type: Optional[RestaurantType]) -> Optional[RestaurantTypeDTO]:
        if restaurant_type is None:
            return None
        return RestaurantTypeDTO(
            id=restaurant_type.id, label=restaurant_type.label, description=restaurant_type.description
        )

    def _restaurant_to_dto(self, restaurant: Optional[Restaurant]) -> Optional[RestaurantDTO]:
        """Transform Restaurant domain entity to RestaurantDTO."""
        if restaurant is None:
            return None
        return RestaurantDTO(
            id=restaurant.id,
            version=restaurant.version,
            name=restaurant.name,
            description=restaurant.description,
            website=restaurant.website,
            street=restaurant.address.street,
            city=self._city_to_dto(restaurant.city),
            type=self._type_to_dto(restaurant.type),
        )
