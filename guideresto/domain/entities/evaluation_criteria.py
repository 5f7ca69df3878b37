"""Evaluation criteria entity."""
from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class EvaluationCriteria:
    """Grading criterion (table CRITERES_EVALUATION). Read-mostly reference data."""
    name: str
    description: Optional[str] = None
    id: Optional[int] = None
    version: int = 0

    def __str__(self) -> str:
        return self.name
