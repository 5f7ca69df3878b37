"""
Sequence allocators.

Produce the identifier of a new row before it is inserted. Allocation
runs on the unit of work's session and never commits.
"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy import Sequence, insert, select, update
from sqlalchemy.orm import Session

from .models import SEQUENCES, SequenceModel

logger = logging.getLogger(__name__)

STRATEGY_AUTO = "auto"
STRATEGY_NATIVE = "native"
STRATEGY_TABLE = "table"


class SequenceAllocator(ABC):
    """Monotonic counter source, one counter per sequence name."""

    @abstractmethod
    def next_value(self, name: str) -> int:
        """Return the next identifier of sequence ``name``."""
        pass


class NativeSequenceAllocator(SequenceAllocator):
    """Database sequences (``SEQ_x.NEXTVAL``), for Oracle / PostgreSQL."""

    def __init__(self, session: Session):
        self._session = session

    def next_value(self, name: str) -> int:
        sequence = SEQUENCES.get(name) or Sequence(name)
        value = self._session.execute(select(sequence.next_value())).scalar_one()
        logger.debug(f"{name} -> {value}")
        return value


class TableSequenceAllocator(SequenceAllocator):
    """
    Counters kept in the SEQUENCES table.

    The row update takes a write lock on the counter for the rest of the
    transaction, so two units of work never receive the same value.
    """

    def __init__(self, session: Session):
        self._session = session

    def next_value(self, name: str) -> int:
        result = self._session.execute(
            update(SequenceModel)
            .where(SequenceModel.name == name)
            .values({SequenceModel.value: SequenceModel.value + 1})
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self._session.execute(insert(SequenceModel).values({SequenceModel.name: name, SequenceModel.value: 1}))
            value = 1
        else:
            value = self._session.execute(
                select(SequenceModel.value).where(SequenceModel.name == name)
            ).scalar_one()
        logger.debug(f"{name} -> {value}")
        return value


def create_sequence_allocator(session: Session, strategy: str = STRATEGY_AUTO) -> SequenceAllocator:
    """
    Build the allocator for ``strategy``.

    Args:
        session: Unit of work session
        strategy: "native", "table" or "auto" (native when the dialect
            supports sequences)

    Returns:
        SequenceAllocator bound to ``session``
    """
    if strategy == STRATEGY_AUTO:
        dialect = session.get_bind().dialect
        strategy = STRATEGY_NATIVE if dialect.supports_sequences else STRATEGY_TABLE

    if strategy == STRATEGY_NATIVE:
        return NativeSequenceAllocator(session)
    if strategy == STRATEGY_TABLE:
        return TableSequenceAllocator(session)
    raise ValueError(f"Unknown sequence strategy: {strategy}")
