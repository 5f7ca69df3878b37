"""Mapper for EvaluationCriteria <-> CRITERES_EVALUATION."""
from typing import Any, Dict, Optional

from ...domain.entities import EvaluationCriteria
from ..models import EvaluationCriteriaModel
from ..models.sequence_model import SEQ_CRITERES_EVALUATION
from .base import AbstractMapper, equals_ignore_case


class EvaluationCriteriaMapper(AbstractMapper[EvaluationCriteria]):
    model = EvaluationCriteriaModel
    entity_name = "EvaluationCriteria"
    sequence_name = SEQ_CRITERES_EVALUATION
    unique_attributes = ("name",)

    def _to_entity(self, row: EvaluationCriteriaModel) -> EvaluationCriteria:
        return EvaluationCriteria(name=row.name, description=row.description, id=row.id, version=row.version)

    def _to_values(self, criteria: EvaluationCriteria) -> Dict[str, Any]:
        return {"name": criteria.name, "description": criteria.description}

    def find_by_name(self, name: str) -> Optional[EvaluationCriteria]:
        statement = self._select().where(equals_ignore_case(EvaluationCriteriaModel.name, name))
        return self._first(statement, "find_by_name")
