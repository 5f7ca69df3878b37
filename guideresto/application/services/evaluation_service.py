"""Application service for evaluations: likes, dislikes and commented grades."""

import logging
from typing import List, Optional, Union

from guideresto.application.dtos import (
    ActionResult,
    AddEvaluationRequest,
    AppreciationRequest,
    BasicEvaluationDTO,
    CompleteEvaluationDTO,
    EvaluationCriteriaDTO,
    GradeDTO,
)
from guideresto.data.uow import UnitOfWork
from guideresto.domain.entities import (
    BasicEvaluation,
    CompleteEvaluation,
    Evaluation,
    EvaluationCriteria,
    Grade,
)

from .base import ApplicationService

logger = logging.getLogger(__name__)

EvaluationDTO = Union[BasicEvaluationDTO, CompleteEvaluationDTO]


class EvaluationService(ApplicationService):
    """Use cases around restaurant evaluations."""

    def get_all_criteria(self) -> List[EvaluationCriteriaDTO]:
        return self._query(
            lambda uow: [self._criteria_to_dto(c) for c in uow.evaluation_criteria.find_all()]
        )

    def count_likes(self, restaurant_id: int) -> int:
        return self._query(lambda uow: uow.basic_evaluations.count_likes(restaurant_id))

    def count_dislikes(self, restaurant_id: int) -> int:
        return self._query(lambda uow: uow.basic_evaluations.count_dislikes(restaurant_id))

    def get_basic_evaluations(self, restaurant_id: int) -> List[BasicEvaluationDTO]:
        return self._query(
            lambda uow: [
                self._evaluation_to_dto(e) for e in uow.basic_evaluations.find_by_restaurant_id(restaurant_id)
            ]
        )

    def get_complete_evaluations(self, restaurant_id: int) -> List[CompleteEvaluationDTO]:
        """Commented evaluations of a restaurant, most recent visit first."""
        return self._query(
            lambda uow: [
                self._evaluation_to_dto(e) for e in uow.complete_evaluations.find_by_restaurant_id(restaurant_id)
            ]
        )

    def get_evaluations(self, restaurant_id: int) -> List[EvaluationDTO]:
        """Every evaluation of a restaurant, most recent visit first."""
        return self._query(
            lambda uow: [self._evaluation_to_dto(e) for e in uow.evaluations.find_by_restaurant_id(restaurant_id)]
        )

    def like_restaurant(self, request: AppreciationRequest) -> ActionResult:
        return self._execute("like_restaurant", lambda uow: self._appreciate(uow, request, True))

    def dislike_restaurant(self, request: AppreciationRequest) -> ActionResult:
        return self._execute("dislike_restaurant", lambda uow: self._appreciate(uow, request, False))

    def add_evaluation(self, request: AddEvaluationRequest) -> ActionResult:
        """Record a commented evaluation with its grades.

        Args:
            request: AddEvaluationRequest DTO, at most one grade per criterion

        Returns:
            ActionResult with the created CompleteEvaluationDTO
        """
        def work(uow: UnitOfWork) -> CompleteEvaluationDTO:
            restaurant = self._require(
                uow.restaurants.find_by_id(request.restaurant_id), "Restaurant", request.restaurant_id
            )
            evaluation = CompleteEvaluation(
                visit_date=request.visit_date,
                restaurant=restaurant,
                comment=request.comment,
                username=request.username,
            )
            for item in request.grades:
                criteria = self._require(
                    uow.evaluation_criteria.find_by_id(item.criteria_id), "EvaluationCriteria", item.criteria_id
                )
                evaluation.grades.add(Grade(grade=item.grade, evaluation=evaluation, criteria=criteria))

            uow.complete_evaluations.create(evaluation)
            return self._evaluation_to_dto(evaluation)

        return self._execute("add_evaluation", work)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _appreciate(self, uow: UnitOfWork, request: AppreciationRequest, like: bool) -> BasicEvaluationDTO:
        restaurant = self._require(
            uow.restaurants.find_by_id(request.restaurant_id), "Restaurant", request.restaurant_id
        )
        evaluation = BasicEvaluation(
            visit_date=request.visit_date,
            restaurant=restaurant,
            like_restaurant=like,
            ip_address=request.ip_address,
        )
        uow.basic_evaluations.create(evaluation)
        return self._evaluation_to_dto(evaluation)

    @staticmethod
    def _criteria_to_dto(criteria: EvaluationCriteria) -> EvaluationCriteriaDTO:
        return EvaluationCriteriaDTO(id=criteria.id, name=criteria.name, description=criteria.description)

    @staticmethod
    def _evaluation_to_dto(evaluation: Optional[Evaluation]) -> Optional[EvaluationDTO]:
        """Transform an evaluation of either kind to its DTO."""
        if evaluation is None:
            return None
        if isinstance(evaluation, BasicEvaluation):
            return BasicEvaluationDTO(
                id=evaluation.id,
                visit_date=evaluation.visit_date,
                restaurant_id=evaluation.restaurant.id,
                like_restaurant=evaluation.like_restaurant,
                ip_address=evaluation.ip_address,
            )
        grades = sorted(evaluation.grades, key=lambda grade: grade.criteria.id)
        return CompleteEvaluationDTO(
            id=evaluation.id,
            visit_date=evaluation.visit_date,
            restaurant_id=evaluation.restaurant.id,
            comment=evaluation.comment,
            username=evaluation.username,
            grades=[
                GradeDTO(criteria_id=grade.criteria.id, criteria_name=grade.criteria.name, grade=grade.grade)
                for grade in grades
            ],
        )
