"""Data mappers: one per concrete table plus the abstract Evaluation type."""

from .base import AbstractMapper, CascadeStep, translate_errors
from .basic_evaluation_mapper import BasicEvaluationMapper
from .city_mapper import CityMapper
from .complete_evaluation_mapper import CompleteEvaluationMapper
from .evaluation_criteria_mapper import EvaluationCriteriaMapper
from .evaluation_mapper import EvaluationMapper
from .grade_mapper import GradeMapper
from .restaurant_mapper import RestaurantMapper
from .restaurant_type_mapper import RestaurantTypeMapper

__all__ = [
    "AbstractMapper",
    "BasicEvaluationMapper",
    "CascadeStep",
    "CityMapper",
    "CompleteEvaluationMapper",
    "EvaluationCriteriaMapper",
    "EvaluationMapper",
    "GradeMapper",
    "RestaurantMapper",
    "RestaurantTypeMapper",
    "translate_errors",
]
