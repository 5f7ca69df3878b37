"""
Base data mapper.

Reads go through the identity cache first; writes run inside a SAVEPOINT
and use the ``version`` column as a compare-and-swap guard. Store failures
are translated into the mapping error taxonomy in one place.
"""
import logging
from abc import abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Type, TypeVar

from sqlalchemy import String, delete, func, literal, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable, Select

from ...domain.exceptions import (
    ConflictError,
    ConstraintViolationError,
    EntityNotFoundError,
    ResourceFailureError,
)
from ...domain.repositories import EntityMapper
from ..identity_cache import IdentityCache
from ..sequences import SequenceAllocator

logger = logging.getLogger(__name__)

E = TypeVar("E")

NO_SYNC = {"synchronize_session": False}


class CascadeStep(NamedTuple):
    """One bulk statement run before the owner row is deleted."""
    label: str
    statement: Executable


@contextmanager
def translate_errors(entity: str, operation: str, entity_id: Optional[int] = None) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as mapping errors."""
    try:
        yield
    except IntegrityError as e:
        logger.error(f"❌ {entity}.{operation} #{entity_id} violates a constraint: {e.orig}")
        raise ConstraintViolationError(entity, detail=str(e.orig)) from e
    except SQLAlchemyError as e:
        logger.error(f"❌ {entity}.{operation} #{entity_id} failed: {e}")
        raise ResourceFailureError(entity, operation, str(e)) from e


def equals_ignore_case(column, text: str):
    # both sides folded by the store so non-ASCII folds the same way
    return func.upper(column, type_=String) == func.upper(literal(text, String), type_=String)


def contains_ignore_case(column, text: str):
    return column.icontains(text, autoescape=True)


class AbstractMapper(EntityMapper[E]):
    """
    Data mapper for one concrete table.

    Subclasses declare the row ``model``, the ``sequence_name`` feeding its
    ids and implement ``_to_entity`` / ``_to_values``. The ``_on_*`` hooks
    keep inverse collections in step with the writes.
    """

    model: Type[Any]
    entity_name: str = "Entity"
    sequence_name: str
    # entity attributes (same name on the row model) unique case-insensitively
    unique_attributes: Tuple[str, ...] = ()

    def __init__(
        self,
        session: Session,
        sequences: SequenceAllocator,
        cache: Optional[IdentityCache[E]] = None,
    ):
        self._session = session
        self._sequences = sequences
        self.cache: IdentityCache[E] = cache if cache is not None else IdentityCache(self.entity_name)

    # ------------------------------------------------------------------ #
    # Row conversion
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _to_entity(self, row: Any) -> E:
        """Build a new entity from a row, resolving its references."""
        pass

    @abstractmethod
    def _to_values(self, entity: E) -> Dict[str, Any]:
        """Column values of ``entity`` keyed by row model attribute name."""
        pass

    def _on_loaded(self, entity: E) -> None:
        pass

    def _on_created(self, entity: E) -> None:
        self._on_loaded(entity)

    def _on_updated(self, entity: E) -> None:
        pass

    def _on_deleted(self, entity: E) -> None:
        pass

    def _on_row_deleted(self, entity_id: int) -> None:
        """Called once per removed row, after every instance was unlinked."""
        pass

    def cascade_steps(self, entity: E) -> List[CascadeStep]:
        """Statements removing the rows owned by ``entity``, in execution order."""
        return []

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    @contextmanager
    def _translate_errors(self, operation: str, entity_id: Optional[int] = None) -> Iterator[None]:
        with translate_errors(self.entity_name, operation, entity_id):
            yield

    def _select(self) -> Select:
        return select(self.model).execution_options(populate_existing=True)

    def _load(self, row: Any) -> E:
        cached = self.cache.get(row.id)
        if cached is not None:
            return cached
        entity = self._to_entity(row)
        # resolving references may already have loaded this very row
        cached = self.cache.get(row.id)
        if cached is not None:
            return cached
        self.cache.put(entity)
        self._on_loaded(entity)
        return entity

    def _first(self, statement: Select, operation: str) -> Optional[E]:
        with self._translate_errors(operation):
            row = self._session.execute(statement).scalars().first()
        if row is None:
            return None
        return self._load(row)

    def _all(self, statement: Select, operation: str) -> List[E]:
        with self._translate_errors(operation):
            rows = self._session.execute(statement).scalars().all()
        return [self._load(row) for row in rows]

    def find_by_id(self, entity_id: int) -> Optional[E]:
        cached = self.cache.get(entity_id)
        if cached is not None:
            logger.debug(f"{self.entity_name} #{entity_id} served from cache")
            return cached
        entity = self._first(self._select().where(self.model.id == entity_id), "find_by_id")
        if entity is None:
            logger.debug(f"{self.entity_name} #{entity_id} not found")
        return entity

    def find_all(self) -> List[E]:
        return self._all(self._select().order_by(self.model.id), "find_all")

    def find_many(self, ids: Iterable[int]) -> Dict[int, E]:
        """Load several ids at once; ids without a row are left out."""
        wanted = list(dict.fromkeys(ids))
        found = {entity_id: self.cache.get(entity_id) for entity_id in wanted if entity_id in self.cache}
        missing = [entity_id for entity_id in wanted if entity_id not in found]
        if missing:
            statement = self._select().where(self.model.id.in_(missing))
            for entity in self._all(statement, "find_many"):
                found[entity.id] = entity
        return found

    def exists(self, entity_id: int) -> bool:
        with self._translate_errors("exists", entity_id):
            return self._current_version(entity_id) is not None

    def count(self) -> int:
        with self._translate_errors("count"):
            return self._session.execute(select(func.count()).select_from(self.model)).scalar_one()

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create(self, entity: E) -> E:
        if entity.id is not None:
            raise ValueError(f"{self.entity_name} #{entity.id} is already persisted")
        self._check_unique(entity)

        with self._translate_errors("create"):
            with self._session.begin_nested():
                new_id = self._sequences.next_value(self.sequence_name)
                self._session.add(self.model(id=new_id, version=0, **self._to_values(entity)))
                self._session.flush()

        entity.id = new_id
        entity.version = 0
        self.cache.put(entity)
        self._on_created(entity)
        logger.info(f"✅ Created {self.entity_name} #{new_id}")
        return entity

    def update(self, entity: E) -> E:
        if entity.id is None:
            raise ValueError(f"{self.entity_name} has no id, create it first")
        self._check_unique(entity)

        with self._translate_errors("update", entity.id):
            with self._session.begin_nested():
                self._verify_version(entity, missing_ok=False)
                values = {getattr(self.model, key): value for key, value in self._to_values(entity).items()}
                values[self.model.version] = entity.version + 1
                result = self._session.execute(
                    update(self.model)
                    .where(self.model.id == entity.id, self.model.version == entity.version)
                    .values(values),
                    execution_options=NO_SYNC,
                )
                self._expect_one(result, entity)

        entity.version += 1
        self.cache.put(entity)
        self._on_updated(entity)
        logger.info(f"Updated {self.entity_name} #{entity.id} (version {entity.version})")
        return entity

    def delete(self, entity: E) -> bool:
        if entity.id is None:
            return False

        with self._translate_errors("delete", entity.id):
            if not self._verify_version(entity, missing_ok=True):
                self._forget(entity)
                logger.info(f"{self.entity_name} #{entity.id} already absent")
                return False

            with self._session.begin_nested():
                for step in self.cascade_steps(entity):
                    result = self._session.execute(step.statement, execution_options=NO_SYNC)
                    logger.info(f"{self.entity_name} #{entity.id}: removed {result.rowcount} {step.label}")
                result = self._session.execute(
                    delete(self.model).where(self.model.id == entity.id, self.model.version == entity.version),
                    execution_options=NO_SYNC,
                )
                self._expect_one(result, entity)

        self._forget(entity)
        logger.info(f"🗑️ Deleted {self.entity_name} #{entity.id}")
        return True

    def delete_by_id(self, entity_id: int) -> bool:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        return self.delete(entity)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _current_version(self, entity_id: int) -> Optional[int]:
        return self._session.execute(
            select(self.model.version).where(self.model.id == entity_id)
        ).scalar_one_or_none()

    def _verify_version(self, entity: E, missing_ok: bool) -> bool:
        current = self._current_version(entity.id)
        if current is None:
            if missing_ok:
                return False
            raise EntityNotFoundError(self.entity_name, entity.id)
        if current != entity.version:
            logger.warning(
                f"{self.entity_name} #{entity.id} is at version {current}, caller holds {entity.version}"
            )
            raise ConflictError(self.entity_name, entity.id, entity.version, current)
        return True

    def _expect_one(self, result: Any, entity: E) -> None:
        if result.rowcount != 1:
            raise ConflictError(self.entity_name, entity.id, entity.version, self._current_version(entity.id))

    def _forget(self, entity: E) -> None:
        cached = self.cache.evict(entity.id)
        instances = [entity] if cached is None or cached is entity else [entity, cached]
        for instance in instances:
            self._on_deleted(instance)
        self._on_row_deleted(entity.id)

    def _check_unique(self, entity: E) -> None:
        for attribute in self.unique_attributes:
            value = getattr(entity, attribute)
            statement = select(self.model.id).where(equals_ignore_case(getattr(self.model, attribute), value))
            if entity.id is not None:
                statement = statement.where(self.model.id != entity.id)
            with self._translate_errors("check_unique", entity.id):
                clash = self._session.execute(statement.limit(1)).scalar_one_or_none()
            if clash is not None:
                logger.warning(f"{self.entity_name}.{attribute} {value!r} already used by #{clash}")
                raise ConstraintViolationError(self.entity_name, attribute, value, f"already used by #{clash}")

    @staticmethod
    def _require_id(entity: Any, role: str) -> int:
        if entity is None or entity.id is None:
            raise ValueError(f"{role} must be persisted before it can be referenced")
        return entity.id
