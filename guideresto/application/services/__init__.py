from .base import ApplicationService
from .evaluation_service import EvaluationService
from .restaurant_service import RestaurantService

__all__ = ["ApplicationService", "EvaluationService", "RestaurantService"]
