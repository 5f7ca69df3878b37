"""City entity."""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Set

if TYPE_CHECKING:
    from .restaurant import Restaurant


@dataclass(eq=False)
class City:
    """
    A city restaurants can be located in (table VILLES).

    ``zip_code`` + ``city_name`` is unique by convention only.
    ``restaurants`` is the inverse side of ``Restaurant.address.city``.
    """
    zip_code: str
    city_name: str
    restaurants: Set["Restaurant"] = field(default_factory=set, repr=False)
    id: Optional[int] = None
    version: int = 0

    def __str__(self) -> str:
        return f"{self.zip_code} {self.city_name}"
