"""Grade entity."""
from dataclasses import dataclass
from typing import Optional

from .evaluation import CompleteEvaluation
from .evaluation_criteria import EvaluationCriteria

MIN_GRADE = 1
MAX_GRADE = 5


@dataclass(eq=False)
class Grade:
    """Score (1-5) given to one criterion inside a complete evaluation (table NOTES)."""
    grade: int
    evaluation: CompleteEvaluation
    criteria: EvaluationCriteria
    id: Optional[int] = None
    version: int = 0

    def __post_init__(self):
        if not MIN_GRADE <= self.grade <= MAX_GRADE:
            raise ValueError(
                f"Grade must be between {MIN_GRADE} and {MAX_GRADE}, got: {self.grade}"
            )
