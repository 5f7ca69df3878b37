"""
Restaurant entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Set

from ..value_objects import Localisation
from .city import City
from .restaurant_type import RestaurantType

if TYPE_CHECKING:
    from .evaluation import Evaluation


@dataclass(eq=False)
class Restaurant:
    """
    A restaurant of the directory (table RESTAURANTS).

    Identity is the numeric ``id``; address and type may both be
    reassigned during the restaurant's lifetime.
    """
    name: str
    description: Optional[str]
    website: Optional[str]
    address: Localisation
    type: RestaurantType
    evaluations: Set["Evaluation"] = field(default_factory=set, repr=False)
    id: Optional[int] = None
    version: int = 0

    @property
    def city(self) -> City:
        return self.address.city

    def relocate(self, street: str, city: City) -> None:
        """Replace the embedded address."""
        self.address = Localisation(street=street, city=city)

    def has_evaluations(self) -> bool:
        return bool(self.evaluations)

    def __str__(self) -> str:
        return f"{self.name} ({self.address})"
