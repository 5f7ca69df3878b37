"""Unit of Work: one session, one set of identity caches, one transaction."""

import logging
from typing import Callable, Dict, Optional, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from ..domain.value_objects import ExecutionID
from .identity_cache import IdentityCache
from .mappers import (
    BasicEvaluationMapper,
    CityMapper,
    CompleteEvaluationMapper,
    EvaluationCriteriaMapper,
    EvaluationMapper,
    GradeMapper,
    RestaurantMapper,
    RestaurantTypeMapper,
    translate_errors,
)
from .sequences import STRATEGY_AUTO, SequenceAllocator, create_sequence_allocator

logger = logging.getLogger(__name__)

M = TypeVar("M")

CACHE_NAMES = (
    "City",
    "RestaurantType",
    "EvaluationCriteria",
    "Restaurant",
    "BasicEvaluation",
    "CompleteEvaluation",
    "Grade",
)


class UnitOfWork:
    """
    Unit of Work for the mapping layer.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Own one identity cache per entity type
    3. Lazily build the mappers, wired to each other
    4. Atomic commit/rollback of every mapper write
    """

    def __init__(self, session_factory: sessionmaker, sequence_strategy: str = STRATEGY_AUTO) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy session factory
            sequence_strategy: "auto", "native" or "table"
        """
        self._session_factory = session_factory
        self._sequence_strategy = sequence_strategy
        self._session: Optional[Session] = None
        self._execution_id: Optional[ExecutionID] = None
        self._caches: Dict[str, IdentityCache] = {}
        self._mappers: Dict[str, object] = {}
        self._sequences: Optional[SequenceAllocator] = None

    def __enter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        self._caches = {name: IdentityCache(name) for name in CACHE_NAMES}
        self._mappers = {}
        self._sequences = None
        logger.debug(f"[{self._execution_id.short}] Unit of work started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close."""
        try:
            if exc_type is not None:
                logger.warning(f"[{self._execution_id.short}] Rolling back after {exc_type.__name__}: {exc_val}")
                self.rollback()
        finally:
            self._session.close()
            self._session = None
            self._mappers = {}
            logger.debug(f"[{self._execution_id.short}] Unit of work closed")

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use it as a context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use it as a context manager.")
        return self._execution_id

    def cache(self, name: str) -> IdentityCache:
        """Identity cache of one entity type, e.g. ``uow.cache("Restaurant")``."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use it as a context manager.")
        return self._caches[name]

    @property
    def sequences(self) -> SequenceAllocator:
        if self._sequences is None:
            self._sequences = create_sequence_allocator(self.session, self._sequence_strategy)
        return self._sequences

    def _mapper(self, name: str, factory: Callable[[], M]) -> M:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use it as a context manager.")
        if name not in self._mappers:
            self._mappers[name] = factory()
        return self._mappers[name]

    # ------------------------------------------------------------------ #
    # Mappers
    # ------------------------------------------------------------------ #

    @property
    def cities(self) -> CityMapper:
        return self._mapper(
            "cities", lambda: CityMapper(self.session, self.sequences, self._caches["City"])
        )

    @property
    def restaurant_types(self) -> RestaurantTypeMapper:
        return self._mapper(
            "restaurant_types",
            lambda: RestaurantTypeMapper(self.session, self.sequences, self._caches["RestaurantType"]),
        )

    @property
    def evaluation_criteria(self) -> EvaluationCriteriaMapper:
        return self._mapper(
            "evaluation_criteria",
            lambda: EvaluationCriteriaMapper(self.session, self.sequences, self._caches["EvaluationCriteria"]),
        )

    @property
    def restaurants(self) -> RestaurantMapper:
        """Lazy-load restaurant mapper.

        The evaluation mappers are built along with it so that a restaurant
        delete always evicts their cached rows.
        """
        def build() -> RestaurantMapper:
            mapper = RestaurantMapper(
                self.session, self.sequences, self.cities, self.restaurant_types, self._caches["Restaurant"]
            )
            self._mappers["restaurants"] = mapper
            self._build_evaluation_mappers(mapper)
            return mapper

        return self._mapper("restaurants", build)

    def _build_evaluation_mappers(self, restaurants: RestaurantMapper) -> None:
        self._mappers["basic_evaluations"] = BasicEvaluationMapper(
            self.session, self.sequences, restaurants, self._caches["BasicEvaluation"]
        )
        self._mappers["complete_evaluations"] = CompleteEvaluationMapper(
            self.session,
            self.sequences,
            restaurants,
            self.evaluation_criteria,
            self._caches["CompleteEvaluation"],
            self._caches["Grade"],
        )

    @property
    def basic_evaluations(self) -> BasicEvaluationMapper:
        self.restaurants  # wires the evaluation mappers
        return self._mappers["basic_evaluations"]

    @property
    def complete_evaluations(self) -> CompleteEvaluationMapper:
        self.restaurants
        return self._mappers["complete_evaluations"]

    @property
    def grades(self) -> GradeMapper:
        return self.complete_evaluations.grades

    @property
    def evaluations(self) -> EvaluationMapper:
        return self._mapper(
            "evaluations",
            lambda: EvaluationMapper(self.session, self.basic_evaluations, self.complete_evaluations),
        )

    # ------------------------------------------------------------------ #
    # Transaction
    # ------------------------------------------------------------------ #

    def commit(self) -> None:
        """Commit all pending changes."""
        with translate_errors("UnitOfWork", "commit"):
            self.session.commit()
        logger.info(f"[{self._execution_id.short}] ✅ Committed")

    def rollback(self) -> None:
        """Rollback all pending changes and forget every cached entity."""
        self.session.rollback()
        for cache in self._caches.values():
            cache.clear()
        logger.info(f"[{self._execution_id.short}] Rolled back")


def create_uow(session_factory: sessionmaker, sequence_strategy: str = STRATEGY_AUTO) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy session factory
        sequence_strategy: Identifier allocation strategy

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory, sequence_strategy)
