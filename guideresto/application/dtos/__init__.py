from .action_result import ActionResult
from .evaluation_dto import (
    AddEvaluationRequest,
    AppreciationRequest,
    BasicEvaluationDTO,
    CompleteEvaluationDTO,
    EvaluationCriteriaDTO,
    GradeDTO,
    GradeRequest,
)
from .restaurant_dto import (
    CityDTO,
    CreateCityRequest,
    CreateRestaurantRequest,
    EditAddressRequest,
    EditRestaurantRequest,
    RestaurantDTO,
    RestaurantTypeDTO,
)

__all__ = [
    "ActionResult",
    "AddEvaluationRequest",
    "AppreciationRequest",
    "BasicEvaluationDTO",
    "CityDTO",
    "CompleteEvaluationDTO",
    "CreateCityRequest",
    "CreateRestaurantRequest",
    "EditAddressRequest",
    "EditRestaurantRequest",
    "EvaluationCriteriaDTO",
    "GradeDTO",
    "GradeRequest",
    "RestaurantDTO",
    "RestaurantTypeDTO",
]
