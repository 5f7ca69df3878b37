"""Mapper for BasicEvaluation <-> LIKES."""
from typing import Any, Dict

from sqlalchemy import func, select

from ...domain.entities import BasicEvaluation
from ..converters import appreciation_to_code, code_to_appreciation
from ..models import BasicEvaluationModel
from ..models.sequence_model import SEQ_EVAL
from .evaluation_base import ConcreteEvaluationMapper


class BasicEvaluationMapper(ConcreteEvaluationMapper[BasicEvaluation]):
    model = BasicEvaluationModel
    entity_name = "BasicEvaluation"
    sequence_name = SEQ_EVAL

    def _to_entity(self, row: BasicEvaluationModel) -> BasicEvaluation:
        return BasicEvaluation(
            visit_date=row.visit_date,
            restaurant=self._restaurants.find_by_id(row.restaurant_id),
            like_restaurant=code_to_appreciation(row.appreciation),
            ip_address=row.ip_address,
            id=row.id,
            version=row.version,
        )

    def _to_values(self, evaluation: BasicEvaluation) -> Dict[str, Any]:
        return {
            "appreciation": appreciation_to_code(evaluation.like_restaurant),
            "visit_date": evaluation.visit_date,
            "ip_address": evaluation.ip_address,
            "restaurant_id": self._require_id(evaluation.restaurant, "Restaurant"),
        }

    def count_likes(self, restaurant_id: int) -> int:
        """Number of likes of a restaurant, counted by the store."""
        return self._count_appreciation(restaurant_id, True)

    def count_dislikes(self, restaurant_id: int) -> int:
        return self._count_appreciation(restaurant_id, False)

    def _count_appreciation(self, restaurant_id: int, like: bool) -> int:
        statement = (
            select(func.count())
            .select_from(BasicEvaluationModel)
            .where(
                BasicEvaluationModel.restaurant_id == restaurant_id,
                BasicEvaluationModel.appreciation == appreciation_to_code(like),
            )
        )
        with self._translate_errors("count_likes" if like else "count_dislikes", restaurant_id):
            return self._session.execute(statement).scalar_one()
