"""Domain layer - pure domain models and interfaces."""

from .entities import (
    BasicEvaluation,
    City,
    CompleteEvaluation,
    Evaluation,
    EvaluationCriteria,
    EvaluationKind,
    Grade,
    Restaurant,
    RestaurantType,
)
from .repositories import EntityMapper
from .value_objects import ExecutionID, Localisation

__all__ = [
    "BasicEvaluation",
    "City",
    "CompleteEvaluation",
    "EntityMapper",
    "Evaluation",
    "EvaluationCriteria",
    "EvaluationKind",
    "ExecutionID",
    "Grade",
    "Localisation",
    "Restaurant",
    "RestaurantType",
]
