"""
Mapper for CompleteEvaluation <-> COMMENTAIRES.

A complete evaluation owns its grades: they are created, synchronised and
deleted together with the evaluation row inside one SAVEPOINT.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete

from ...domain.entities import CompleteEvaluation, Grade
from ...domain.exceptions import ConstraintViolationError
from ..identity_cache import IdentityCache
from ..models import CompleteEvaluationModel, GradeModel
from ..models.sequence_model import SEQ_EVAL
from ..sequences import SequenceAllocator
from .base import NO_SYNC, CascadeStep
from .evaluation_base import ConcreteEvaluationMapper
from .evaluation_criteria_mapper import EvaluationCriteriaMapper
from .grade_mapper import GradeMapper
from .restaurant_mapper import RestaurantMapper

logger = logging.getLogger(__name__)


class CompleteEvaluationMapper(ConcreteEvaluationMapper[CompleteEvaluation]):
    model = CompleteEvaluationModel
    entity_name = "CompleteEvaluation"
    sequence_name = SEQ_EVAL

    def __init__(
        self,
        session,
        sequences: SequenceAllocator,
        restaurants: RestaurantMapper,
        criteria: EvaluationCriteriaMapper,
        cache: Optional[IdentityCache[CompleteEvaluation]] = None,
        grade_cache: Optional[IdentityCache[Grade]] = None,
    ):
        super().__init__(session, sequences, restaurants, cache)
        self.grades = GradeMapper(session, sequences, self, criteria, grade_cache)

    def _restaurant_order(self):
        # most recent visit first
        return (CompleteEvaluationModel.visit_date.desc(), CompleteEvaluationModel.id.desc())

    def _to_entity(self, row: CompleteEvaluationModel) -> CompleteEvaluation:
        return CompleteEvaluation(
            visit_date=row.visit_date,
            restaurant=self._restaurants.find_by_id(row.restaurant_id),
            comment=row.comment,
            username=row.username,
            id=row.id,
            version=row.version,
        )

    def _to_values(self, evaluation: CompleteEvaluation) -> Dict[str, Any]:
        return {
            "visit_date": evaluation.visit_date,
            "restaurant_id": self._require_id(evaluation.restaurant, "Restaurant"),
            "comment": evaluation.comment,
            "username": evaluation.username,
        }

    def _on_loaded(self, evaluation: CompleteEvaluation) -> None:
        super()._on_loaded(evaluation)
        self.grades.find_by_evaluation_id(evaluation.id)

    def _on_created(self, evaluation: CompleteEvaluation) -> None:
        # grades are written by create() itself
        super()._on_loaded(evaluation)

    def _on_deleted(self, evaluation: CompleteEvaluation) -> None:
        super()._on_deleted(evaluation)
        self.grades.cache.evict_where(lambda grade: grade.evaluation is evaluation)

    def cascade_steps(self, evaluation: CompleteEvaluation) -> List[CascadeStep]:
        return [CascadeStep("grades", delete(GradeModel).where(GradeModel.evaluation_id == evaluation.id))]

    def evict_for_restaurant(self, restaurant_id: int) -> List[CompleteEvaluation]:
        evicted = super().evict_for_restaurant(restaurant_id)
        for evaluation in evicted:
            self.grades.cache.evict_where(lambda grade: grade.evaluation is evaluation)
        return evicted

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create(self, evaluation: CompleteEvaluation) -> CompleteEvaluation:
        """
        Insert the evaluation row, then one NOTES row per grade.

        Either everything is written or nothing is: on failure the
        evaluation and its grades are left without ids. A second grade for
        the same criterion is rejected before anything is written.
        """
        if evaluation.id is not None:
            raise ValueError(f"{self.entity_name} #{evaluation.id} is already persisted")
        self._check_one_grade_per_criteria(evaluation)

        grades = list(evaluation.grades)
        try:
            with self._translate_errors("create"):
                with self._session.begin_nested():
                    super().create(evaluation)
                    for grade in grades:
                        grade.evaluation = evaluation
                        self.grades.create(grade)
        except Exception:
            logger.error(f"❌ CompleteEvaluation create rolled back ({len(grades)} grades)")
            self._undo_create(evaluation, grades)
            raise

        return evaluation

    def update(self, evaluation: CompleteEvaluation) -> CompleteEvaluation:
        """
        Write the evaluation row and synchronise its grades.

        Grades removed from ``evaluation.grades`` are deleted, new ones
        inserted and the others updated. A second grade for the same
        criterion is rejected before anything is written.
        """
        self._check_one_grade_per_criteria(evaluation)
        previous_version = evaluation.version
        snapshot = [(grade, grade.id, grade.version) for grade in evaluation.grades]
        try:
            with self._translate_errors("update", evaluation.id):
                with self._session.begin_nested():
                    super().update(evaluation)
                    self._sync_grades(evaluation)
        except Exception:
            evaluation.version = previous_version
            for grade, grade_id, grade_version in snapshot:
                if grade.id != grade_id:
                    self.grades.cache.evict(grade.id)
                grade.id = grade_id
                grade.version = grade_version
            raise

        return evaluation

    def _sync_grades(self, evaluation: CompleteEvaluation) -> None:
        kept_ids = [grade.id for grade in evaluation.grades if grade.id is not None]
        orphans = delete(GradeModel).where(GradeModel.evaluation_id == evaluation.id)
        if kept_ids:
            orphans = orphans.where(GradeModel.id.not_in(kept_ids))
        result = self._session.execute(orphans, execution_options=NO_SYNC)
        if result.rowcount:
            logger.info(f"CompleteEvaluation #{evaluation.id}: removed {result.rowcount} orphan grades")
        self.grades.cache.evict_where(
            lambda grade: grade.evaluation is evaluation and grade not in evaluation.grades
        )

        for grade in list(evaluation.grades):
            grade.evaluation = evaluation
            if grade.id is None:
                self.grades.create(grade)
            else:
                self.grades.update(grade)

    def _check_one_grade_per_criteria(self, evaluation: CompleteEvaluation) -> None:
        graded = set()
        for grade in evaluation.grades:
            criteria_id = self._require_id(grade.criteria, "EvaluationCriteria")
            if criteria_id in graded:
                logger.warning(f"CompleteEvaluation #{evaluation.id} grades criterion #{criteria_id} twice")
                raise ConstraintViolationError("Grade", "criteria_id", criteria_id, "one grade per criterion")
            graded.add(criteria_id)

    def _undo_create(self, evaluation: CompleteEvaluation, grades: List[Grade]) -> None:
        for grade in grades:
            if grade.id is not None:
                self.grades.cache.evict(grade.id)
                grade.id = None
                grade.version = 0
        if evaluation.id is not None:
            self.cache.evict(evaluation.id)
            evaluation.restaurant.evaluations.discard(evaluation)
            evaluation.id = None
            evaluation.version = 0
