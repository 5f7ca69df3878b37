"""Mapper for City <-> VILLES."""
from typing import Any, Dict, List, Optional

from ...domain.entities import City
from ..models import CityModel
from ..models.sequence_model import SEQ_VILLES
from .base import AbstractMapper, contains_ignore_case, equals_ignore_case


class CityMapper(AbstractMapper[City]):
    model = CityModel
    entity_name = "City"
    sequence_name = SEQ_VILLES

    def _to_entity(self, row: CityModel) -> City:
        return City(zip_code=row.zip_code, city_name=row.city_name, id=row.id, version=row.version)

    def _to_values(self, city: City) -> Dict[str, Any]:
        return {"zip_code": city.zip_code, "city_name": city.city_name}

    def find_by_name(self, name: str) -> Optional[City]:
        """First city (lowest id) whose name matches, ignoring case."""
        statement = self._select().where(equals_ignore_case(CityModel.city_name, name)).order_by(CityModel.id)
        return self._first(statement, "find_by_name")

    def find_by_name_like(self, part: str) -> List[City]:
        statement = self._select().where(contains_ignore_case(CityModel.city_name, part)).order_by(CityModel.id)
        return self._all(statement, "find_by_name_like")

    def find_by_zip_code(self, zip_code: str) -> Optional[City]:
        statement = self._select().where(CityModel.zip_code == zip_code).order_by(CityModel.id)
        return self._first(statement, "find_by_zip_code")
