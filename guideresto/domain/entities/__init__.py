"""Domain entities."""

from .city import City
from .evaluation import BasicEvaluation, CompleteEvaluation, Evaluation, EvaluationKind
from .evaluation_criteria import EvaluationCriteria
from .grade import MAX_GRADE, MIN_GRADE, Grade
from .restaurant import Restaurant
from .restaurant_type import RestaurantType

__all__ = [
    "BasicEvaluation",
    "City",
    "CompleteEvaluation",
    "Evaluation",
    "EvaluationCriteria",
    "EvaluationKind",
    "Grade",
    "MAX_GRADE",
    "MIN_GRADE",
    "Restaurant",
    "RestaurantType",
]
