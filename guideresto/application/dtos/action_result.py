"""Outcome of a mutating use case."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ActionResult:
    """
    Output of every write use case.

    Errors are reported here instead of being raised.
    """
    success: bool
    value: Any = None
    execution_id: Optional[str] = None

    # Error data
    error: Optional[str] = None
    error_details: Optional[str] = None

    @classmethod
    def ok(cls, value: Any = None, execution_id: Optional[str] = None) -> "ActionResult":
        return cls(success=True, value=value, execution_id=execution_id)

    @classmethod
    def failed(cls, error: Exception, execution_id: Optional[str] = None) -> "ActionResult":
        return cls(
            success=False,
            execution_id=execution_id,
            error=type(error).__name__,
            error_details=str(error),
        )
