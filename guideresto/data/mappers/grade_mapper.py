"""Mapper for Grade <-> NOTES."""
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ...domain.entities import Grade
from ..identity_cache import IdentityCache
from ..models import GradeModel
from ..models.sequence_model import SEQ_NOTES
from ..sequences import SequenceAllocator
from .base import AbstractMapper
from .evaluation_criteria_mapper import EvaluationCriteriaMapper

if TYPE_CHECKING:
    from .complete_evaluation_mapper import CompleteEvaluationMapper


class GradeMapper(AbstractMapper[Grade]):
    """
    Grades belong to a complete evaluation and are normally written through
    ``CompleteEvaluationMapper``, which owns this mapper.
    """

    model = GradeModel
    entity_name = "Grade"
    sequence_name = SEQ_NOTES

    def __init__(
        self,
        session,
        sequences: SequenceAllocator,
        evaluations: "CompleteEvaluationMapper",
        criteria: EvaluationCriteriaMapper,
        cache: Optional[IdentityCache[Grade]] = None,
    ):
        super().__init__(session, sequences, cache)
        self._evaluations = evaluations
        self._criteria = criteria

    def _to_entity(self, row: GradeModel) -> Grade:
        return Grade(
            grade=row.grade,
            evaluation=self._evaluations.find_by_id(row.evaluation_id),
            criteria=self._criteria.find_by_id(row.criteria_id),
            id=row.id,
            version=row.version,
        )

    def _to_values(self, grade: Grade) -> Dict[str, Any]:
        return {
            "grade": grade.grade,
            "evaluation_id": self._require_id(grade.evaluation, "CompleteEvaluation"),
            "criteria_id": self._require_id(grade.criteria, "EvaluationCriteria"),
        }

    def _on_loaded(self, grade: Grade) -> None:
        grade.evaluation.grades.add(grade)

    def _on_deleted(self, grade: Grade) -> None:
        grade.evaluation.grades.discard(grade)

    def find_by_evaluation_id(self, evaluation_id: int) -> List[Grade]:
        statement = self._select().where(GradeModel.evaluation_id == evaluation_id).order_by(GradeModel.id)
        return self._all(statement, "find_by_evaluation_id")

    def find_by_criteria_id(self, criteria_id: int) -> List[Grade]:
        statement = self._select().where(GradeModel.criteria_id == criteria_id).order_by(GradeModel.id)
        return self._all(statement, "find_by_criteria_id")
