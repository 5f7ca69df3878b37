"""Database row models."""

from .base import Base
from .evaluation_models import BasicEvaluationModel, CompleteEvaluationModel, GradeModel
from .reference_models import CityModel, EvaluationCriteriaModel, RestaurantTypeModel
from .restaurant_model import RestaurantModel
from .sequence_model import SEQUENCE_NAMES, SEQUENCES, SequenceModel

__all__ = [
    "Base",
    "BasicEvaluationModel",
    "CityModel",
    "CompleteEvaluationModel",
    "EvaluationCriteriaModel",
    "GradeModel",
    "RestaurantModel",
    "RestaurantTypeModel",
    "SEQUENCE_NAMES",
    "SEQUENCES",
    "SequenceModel",
]
