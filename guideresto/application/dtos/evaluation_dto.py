"""Application DTOs for evaluations."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from guideresto.domain.entities import MAX_GRADE, MIN_GRADE, EvaluationKind


class EvaluationCriteriaDTO(BaseModel):
    """Response DTO for a grading criterion."""

    id: int = Field(..., description="Criterion number")
    name: str = Field(..., description="Unique criterion name")
    description: Optional[str] = Field(None, description="Free text description")

    model_config = {"frozen": True}


class GradeDTO(BaseModel):
    """One grade of a complete evaluation."""

    criteria_id: int = Field(..., description="Criterion number")
    criteria_name: str = Field(..., description="Criterion name")
    grade: int = Field(..., ge=MIN_GRADE, le=MAX_GRADE, description="Score")

    model_config = {"frozen": True}


class BasicEvaluationDTO(BaseModel):
    """Response DTO for a like / dislike."""

    id: int = Field(..., description="Evaluation number")
    kind: EvaluationKind = Field(EvaluationKind.BASIC, description="Evaluation kind")
    visit_date: date = Field(..., description="Visit date")
    restaurant_id: int = Field(..., description="Evaluated restaurant")
    like_restaurant: bool = Field(..., description="True for a like")
    ip_address: str = Field(..., description="Visitor address")

    model_config = {"frozen": True}


class CompleteEvaluationDTO(BaseModel):
    """Response DTO for a commented evaluation."""

    id: int = Field(..., description="Evaluation number")
    kind: EvaluationKind = Field(EvaluationKind.COMPLETE, description="Evaluation kind")
    visit_date: date = Field(..., description="Visit date")
    restaurant_id: int = Field(..., description="Evaluated restaurant")
    comment: str = Field(..., description="Comment")
    username: str = Field(..., description="Author")
    grades: List[GradeDTO] = Field(default_factory=list, description="Grades by criterion")

    model_config = {"frozen": True}


class AppreciationRequest(BaseModel):
    """Request DTO for liking or disliking a restaurant."""

    restaurant_id: int = Field(..., description="Restaurant number")
    ip_address: str = Field(..., min_length=1, max_length=100, description="Visitor address")
    visit_date: date = Field(default_factory=date.today, description="Visit date")

    model_config = {"frozen": True}


class GradeRequest(BaseModel):
    """One grade of an evaluation request."""

    criteria_id: int = Field(..., description="Criterion number")
    grade: int = Field(..., ge=MIN_GRADE, le=MAX_GRADE, description="Score")

    model_config = {"frozen": True}


class AddEvaluationRequest(BaseModel):
    """Request DTO for a commented evaluation."""

    restaurant_id: int = Field(..., description="Restaurant number")
    username: str = Field(..., min_length=1, max_length=100, description="Author")
    comment: str = Field(..., min_length=1, description="Comment")
    visit_date: date = Field(default_factory=date.today, description="Visit date")
    grades: List[GradeRequest] = Field(default_factory=list, description="At most one grade per criterion")

    model_config = {"frozen": True}
