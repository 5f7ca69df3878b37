"""Mapper for RestaurantType <-> TYPES_GASTRONOMIQUES."""
from typing import Any, Dict, Optional

from ...domain.entities import RestaurantType
from ..models import RestaurantTypeModel
from ..models.sequence_model import SEQ_TYPES_GASTRONOMIQUES
from .base import AbstractMapper, equals_ignore_case


class RestaurantTypeMapper(AbstractMapper[RestaurantType]):
    model = RestaurantTypeModel
    entity_name = "RestaurantType"
    sequence_name = SEQ_TYPES_GASTRONOMIQUES
    unique_attributes = ("label",)

    def _to_entity(self, row: RestaurantTypeModel) -> RestaurantType:
        return RestaurantType(label=row.label, description=row.description, id=row.id, version=row.version)

    def _to_values(self, restaurant_type: RestaurantType) -> Dict[str, Any]:
        return {"label": restaurant_type.label, "description": restaurant_type.description}

    def find_by_label(self, label: str) -> Optional[RestaurantType]:
        statement = self._select().where(equals_ignore_case(RestaurantTypeModel.label, label))
        return self._first(statement, "find_by_label")
