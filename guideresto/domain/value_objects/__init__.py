"""Domain value objects."""

from .execution_id import ExecutionID
from .localisation import Localisation

__all__ = ["ExecutionID", "Localisation"]
