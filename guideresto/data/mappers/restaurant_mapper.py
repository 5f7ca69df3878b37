"""
Mapper for Restaurant <-> RESTAURANTS.

The address is embedded: ``adresse`` holds the street and ``fk_vill`` the
city. Deleting a restaurant removes its evaluations (and their grades)
first, all inside one SAVEPOINT.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select

from ...domain.entities import Restaurant
from ...domain.value_objects import Localisation
from ..identity_cache import IdentityCache
from ..models import (
    BasicEvaluationModel,
    CityModel,
    CompleteEvaluationModel,
    GradeModel,
    RestaurantModel,
    RestaurantTypeModel,
)
from ..models.sequence_model import SEQ_RESTAURANTS
from ..sequences import SequenceAllocator
from .base import AbstractMapper, CascadeStep, contains_ignore_case, equals_ignore_case
from .city_mapper import CityMapper
from .restaurant_type_mapper import RestaurantTypeMapper

logger = logging.getLogger(__name__)


class RestaurantMapper(AbstractMapper[Restaurant]):
    model = RestaurantModel
    entity_name = "Restaurant"
    sequence_name = SEQ_RESTAURANTS

    def __init__(
        self,
        session,
        sequences: SequenceAllocator,
        cities: CityMapper,
        restaurant_types: RestaurantTypeMapper,
        cache: Optional[IdentityCache[Restaurant]] = None,
    ):
        super().__init__(session, sequences, cache)
        self._cities = cities
        self._types = restaurant_types
        self._dependents: List[Any] = []

    def register_dependent(self, mapper: Any) -> None:
        """
        Register a mapper whose rows belong to a restaurant.

        ``mapper.evict_for_restaurant(restaurant_id)`` is called after a
        restaurant is deleted so no stale evaluation survives in its cache.
        """
        if mapper not in self._dependents:
            self._dependents.append(mapper)

    def _to_entity(self, row: RestaurantModel) -> Restaurant:
        city = self._cities.find_by_id(row.city_id)
        restaurant_type = self._types.find_by_id(row.type_id)
        return Restaurant(
            name=row.name,
            description=row.description,
            website=row.website,
            address=Localisation(street=row.street, city=city),
            type=restaurant_type,
            id=row.id,
            version=row.version,
        )

    def _to_values(self, restaurant: Restaurant) -> Dict[str, Any]:
        return {
            "name": restaurant.name,
            "description": restaurant.description,
            "website": restaurant.website,
            "street": restaurant.address.street,
            "city_id": self._require_id(restaurant.address.city, "City"),
            "type_id": self._require_id(restaurant.type, "RestaurantType"),
        }

    def _on_loaded(self, restaurant: Restaurant) -> None:
        restaurant.city.restaurants.add(restaurant)
        restaurant.type.restaurants.add(restaurant)

    def _on_updated(self, restaurant: Restaurant) -> None:
        # address or type may have moved
        for city in self._cities.cache:
            if city is not restaurant.city:
                city.restaurants.discard(restaurant)
        for restaurant_type in self._types.cache:
            if restaurant_type is not restaurant.type:
                restaurant_type.restaurants.discard(restaurant)
        self._on_loaded(restaurant)

    def _on_deleted(self, restaurant: Restaurant) -> None:
        restaurant.city.restaurants.discard(restaurant)
        restaurant.type.restaurants.discard(restaurant)
        restaurant.evaluations.clear()

    def _on_row_deleted(self, restaurant_id: int) -> None:
        logger.debug(f"Evicting evaluations of restaurant #{restaurant_id}")
        for dependent in self._dependents:
            dependent.evict_for_restaurant(restaurant_id)

    def cascade_steps(self, restaurant: Restaurant) -> List[CascadeStep]:
        comments = select(CompleteEvaluationModel.id).where(CompleteEvaluationModel.restaurant_id == restaurant.id)
        return [
            CascadeStep("grades", delete(GradeModel).where(GradeModel.evaluation_id.in_(comments))),
            CascadeStep(
                "complete evaluations",
                delete(CompleteEvaluationModel).where(CompleteEvaluationModel.restaurant_id == restaurant.id),
            ),
            CascadeStep(
                "basic evaluations",
                delete(BasicEvaluationModel).where(BasicEvaluationModel.restaurant_id == restaurant.id),
            ),
        ]

    # ------------------------------------------------------------------ #
    # Finders
    # ------------------------------------------------------------------ #

    def find_by_name(self, name: str) -> Optional[Restaurant]:
        statement = self._select().where(equals_ignore_case(RestaurantModel.name, name)).order_by(RestaurantModel.id)
        return self._first(statement, "find_by_name")

    def find_by_name_like(self, part: str) -> List[Restaurant]:
        statement = (
            self._select().where(contains_ignore_case(RestaurantModel.name, part)).order_by(RestaurantModel.id)
        )
        return self._all(statement, "find_by_name_like")

    def find_by_city_name(self, part: str) -> List[Restaurant]:
        """Restaurants whose city name contains ``part``, ignoring case."""
        statement = (
            self._select()
            .join(CityModel, RestaurantModel.city_id == CityModel.id)
            .where(contains_ignore_case(CityModel.city_name, part))
            .order_by(RestaurantModel.id)
        )
        return self._all(statement, "find_by_city_name")

    def find_by_city_id(self, city_id: int) -> List[Restaurant]:
        statement = self._select().where(RestaurantModel.city_id == city_id).order_by(RestaurantModel.id)
        return self._all(statement, "find_by_city_id")

    def find_by_type_id(self, type_id: int) -> List[Restaurant]:
        statement = self._select().where(RestaurantModel.type_id == type_id).order_by(RestaurantModel.id)
        return self._all(statement, "find_by_type_id")

    def find_by_type_label(self, label: str) -> List[Restaurant]:
        statement = (
            self._select()
            .join(RestaurantTypeModel, RestaurantModel.type_id == RestaurantTypeModel.id)
            .where(equals_ignore_case(RestaurantTypeModel.label, label))
            .order_by(RestaurantModel.id)
        )
        return self._all(statement, "find_by_type_label")
