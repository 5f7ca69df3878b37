"""Shared plumbing of the application services."""

import logging
from typing import Any, Callable

from sqlalchemy.orm import sessionmaker

from guideresto.application.dtos import ActionResult
from guideresto.data.sequences import STRATEGY_AUTO
from guideresto.data.uow import UnitOfWork, create_uow
from guideresto.domain.exceptions import EntityNotFoundError, MappingError

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Base for application services.

    Responsibilities:
    - Run every use case in its own unit of work
    - Commit writes, report their failures as ActionResult
    """

    def __init__(self, session_factory: sessionmaker, sequence_strategy: str = STRATEGY_AUTO) -> None:
        """Initialize application service.

        Args:
            session_factory: SQLAlchemy session factory
            sequence_strategy: Identifier allocation strategy for new rows
        """
        self._session_factory = session_factory
        self._sequence_strategy = sequence_strategy

    def _uow(self) -> UnitOfWork:
        return create_uow(self._session_factory, self._sequence_strategy)

    def _query(self, work: Callable[[UnitOfWork], Any]) -> Any:
        """Run a read-only use case. Errors propagate."""
        with self._uow() as uow:
            return work(uow)

    def _execute(self, action: str, work: Callable[[UnitOfWork], Any]) -> ActionResult:
        """
        Run a write use case and commit it.

        Args:
            action: Name used in log lines
            work: Callable receiving the unit of work, returning the result value

        Returns:
            ActionResult carrying ``work``'s return value or the error
        """
        uow = self._uow()
        execution_id = None
        try:
            with uow:
                execution_id = str(uow.execution_id)
                value = work(uow)
                uow.commit()
            logger.info(f"[{execution_id}] ✅ {action} succeeded")
            return ActionResult.ok(value, execution_id)
        except MappingError as e:
            logger.warning(f"[{execution_id}] ❌ {action} failed: {e}")
            return ActionResult.failed(e, execution_id)
        except ValueError as e:
            logger.warning(f"[{execution_id}] ❌ {action} rejected: {e}")
            return ActionResult.failed(e, execution_id)
        except Exception as e:
            logger.error(f"[{execution_id}] ❌ Unexpected error during {action}: {e}", exc_info=True)
            return ActionResult.failed(e, execution_id)

    @staticmethod
    def _require(entity: Any, entity_name: str, entity_id: int) -> Any:
        if entity is None:
            raise EntityNotFoundError(entity_name, entity_id)
        return entity
