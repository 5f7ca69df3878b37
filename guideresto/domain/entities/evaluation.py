"""
Evaluation hierarchy.

Evaluation is abstract; each concrete kind lives in its own table and is
tagged with an ``EvaluationKind`` whose value is that table's name.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional, Set

from .restaurant import Restaurant

if TYPE_CHECKING:
    from .grade import Grade


class EvaluationKind(str, Enum):
    """Concrete evaluation kind, valued by its source table."""
    BASIC = "LIKES"
    COMPLETE = "COMMENTAIRES"


@dataclass(eq=False)
class Evaluation:
    """Common part of every evaluation: when, and which restaurant."""
    visit_date: date
    restaurant: Restaurant

    kind: ClassVar[EvaluationKind]

    def __post_init__(self):
        if type(self) is Evaluation:
            raise TypeError("Evaluation is abstract, use BasicEvaluation or CompleteEvaluation")


@dataclass(eq=False)
class BasicEvaluation(Evaluation):
    """Like / dislike left by an anonymous visitor (table LIKES)."""
    like_restaurant: bool
    ip_address: str
    id: Optional[int] = None
    version: int = 0

    kind: ClassVar[EvaluationKind] = EvaluationKind.BASIC


@dataclass(eq=False)
class CompleteEvaluation(Evaluation):
    """Commented evaluation with one grade per criterion (table COMMENTAIRES)."""
    comment: str
    username: str
    grades: Set["Grade"] = field(default_factory=set, repr=False)
    id: Optional[int] = None
    version: int = 0

    kind: ClassVar[EvaluationKind] = EvaluationKind.COMPLETE

    def grade_for(self, criteria_name: str) -> Optional["Grade"]:
        """Grade given for the criterion with this name, if any."""
        for grade in self.grades:
            if grade.criteria.name.lower() == criteria_name.lower():
                return grade
        return None

    def average_grade(self) -> Optional[float]:
        if not self.grades:
            return None
        return sum(grade.grade for grade in self.grades) / len(self.grades)
