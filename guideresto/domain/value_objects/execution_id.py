"""Execution identifier value object."""
from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier of one unit of work, used to correlate log lines."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        return cls(value=uuid4())

    @property
    def short(self) -> str:
        """First block of the UUID, enough to tell log lines apart."""
        return str(self.value).split("-")[0]

    def __str__(self) -> str:
        return str(self.value)
