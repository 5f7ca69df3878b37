"""Embedded restaurant address."""
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities.city import City


@dataclass(frozen=True)
class Localisation:
    """
    Street + city of a restaurant.

    Owned by exactly one restaurant and stored in the RESTAURANTS row
    (``adresse`` and ``fk_vill``). Replace it as a whole to move a restaurant.
    """
    street: str
    city: "City"

    def __str__(self) -> str:
        return f"{self.street}, {self.city.zip_code} {self.city.city_name}"
