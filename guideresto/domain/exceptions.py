"""
Mapping layer error taxonomy.

A lookup that finds nothing is NOT an error: finders return ``None`` and
deletes return ``False``. Everything below signals that a write could not
be applied as requested.
"""
from typing import Any, Optional


class MappingError(Exception):
    """Base class for all errors raised by the mapping layer."""

    def __init__(self, message: str, entity: Optional[str] = None):
        super().__init__(message)
        self.entity = entity


class EntityNotFoundError(MappingError):
    """Raised when a write targets or references a row that does not exist."""

    def __init__(self, entity: str, entity_id: Optional[int]):
        super().__init__(f"{entity} #{entity_id} does not exist", entity)
        self.entity_id = entity_id


class ConflictError(MappingError):
    """
    Raised when an update/delete observes a version mismatch.

    The caller may reload the entity and retry; the row still exists.
    """

    def __init__(
        self,
        entity: str,
        entity_id: Optional[int],
        expected_version: int,
        actual_version: Optional[int] = None,
    ):
        super().__init__(
            f"{entity} #{entity_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            entity,
        )
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class ConstraintViolationError(MappingError):
    """Raised when a write collides with a unique, foreign key or check constraint."""

    def __init__(
        self,
        entity: str,
        field: Optional[str] = None,
        value: Any = None,
        detail: Optional[str] = None,
    ):
        if field is not None:
            message = f"{entity}.{field} = {value!r} violates a constraint"
        else:
            message = f"{entity} write violates a constraint"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, entity)
        self.field = field
        self.value = value
        self.detail = detail


class ResourceFailureError(MappingError):
    """Raised when the store is unavailable or a statement fails for infrastructure reasons."""

    def __init__(self, entity: str, operation: str, detail: str):
        super().__init__(f"{entity}.{operation} failed: {detail}", entity)
        self.operation = operation
        self.detail = detail
