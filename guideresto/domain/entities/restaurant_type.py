"""Gastronomic type entity."""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Set

if TYPE_CHECKING:
    from .restaurant import Restaurant


@dataclass(eq=False)
class RestaurantType:
    """Kind of cuisine (table TYPES_GASTRONOMIQUES). ``label`` is unique."""
    label: str
    description: Optional[str] = None
    restaurants: Set["Restaurant"] = field(default_factory=set, repr=False)
    id: Optional[int] = None
    version: int = 0

    def __str__(self) -> str:
        return self.label
