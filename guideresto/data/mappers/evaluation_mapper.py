"""
Mapper for the abstract Evaluation type.

There is no EVALUATIONS table: reads run a UNION ALL over LIKES and
COMMENTAIRES, tagging each row with its source table, and hand every id
to the concrete mapper named by the tag. Writes dispatch on the entity's
``kind``.
"""
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import literal, select, union_all
from sqlalchemy.orm import Session

from ...domain.entities import Evaluation, EvaluationKind
from ...domain.repositories import EntityMapper
from ..models import BasicEvaluationModel, CompleteEvaluationModel
from .base import translate_errors
from .basic_evaluation_mapper import BasicEvaluationMapper
from .complete_evaluation_mapper import CompleteEvaluationMapper
from .evaluation_base import ConcreteEvaluationMapper

logger = logging.getLogger(__name__)

ENTITY_NAME = "Evaluation"


class EvaluationMapper(EntityMapper[Evaluation]):
    """Polymorphic facade over the concrete evaluation mappers."""

    def __init__(self, session: Session, basic: BasicEvaluationMapper, complete: CompleteEvaluationMapper):
        self._session = session
        self._mappers: Dict[EvaluationKind, ConcreteEvaluationMapper] = {
            EvaluationKind.BASIC: basic,
            EvaluationKind.COMPLETE: complete,
        }

    def mapper_for(self, kind: EvaluationKind) -> ConcreteEvaluationMapper:
        try:
            return self._mappers[EvaluationKind(kind)]
        except (KeyError, ValueError) as e:
            raise ValueError(f"No mapper for evaluation kind: {kind!r}") from e

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    @staticmethod
    def _tagged_evaluations():
        """Every evaluation row as (numero, kind, date_eval, fk_rest)."""
        basic = select(
            BasicEvaluationModel.id.label("numero"),
            literal(EvaluationKind.BASIC.value).label("kind"),
            BasicEvaluationModel.visit_date.label("date_eval"),
            BasicEvaluationModel.restaurant_id.label("fk_rest"),
        )
        complete = select(
            CompleteEvaluationModel.id.label("numero"),
            literal(EvaluationKind.COMPLETE.value).label("kind"),
            CompleteEvaluationModel.visit_date.label("date_eval"),
            CompleteEvaluationModel.restaurant_id.label("fk_rest"),
        )
        return union_all(basic, complete).subquery("evaluations")

    def _find_tagged(self, operation: str, restaurant_id: Optional[int] = None,
                     evaluation_id: Optional[int] = None) -> List[Evaluation]:
        tagged = self._tagged_evaluations()
        statement = select(tagged.c.numero, tagged.c.kind)
        if restaurant_id is not None:
            statement = statement.where(tagged.c.fk_rest == restaurant_id)
        if evaluation_id is not None:
            statement = statement.where(tagged.c.numero == evaluation_id)
        statement = statement.order_by(tagged.c.date_eval.desc(), tagged.c.numero.desc())

        with translate_errors(ENTITY_NAME, operation, evaluation_id):
            rows = self._session.execute(statement).all()

        ids_by_kind: Dict[EvaluationKind, List[int]] = defaultdict(list)
        for row in rows:
            ids_by_kind[EvaluationKind(row.kind)].append(row.numero)
        loaded = {kind: self._mappers[kind].find_many(ids) for kind, ids in ids_by_kind.items()}

        return [
            loaded[EvaluationKind(row.kind)][row.numero]
            for row in rows
            if row.numero in loaded[EvaluationKind(row.kind)]
        ]

    def find_by_id(self, evaluation_id: int) -> Optional[Evaluation]:
        for mapper in self._mappers.values():
            cached = mapper.cache.get(evaluation_id)
            if cached is not None:
                return cached
        found = self._find_tagged("find_by_id", evaluation_id=evaluation_id)
        return found[0] if found else None

    def find_all(self) -> List[Evaluation]:
        """All evaluations, most recent visit first."""
        return self._find_tagged("find_all")

    def find_by_restaurant_id(
        self, restaurant_id: int, kinds: Optional[Iterable[EvaluationKind]] = None
    ) -> List[Evaluation]:
        """
        Evaluations of one restaurant.

        Args:
            restaurant_id: Restaurant identifier
            kinds: Restrict to these kinds; every kind when omitted

        Returns:
            Evaluations ordered by visit date descending when several kinds
            are requested, in the concrete mapper's order for a single kind
        """
        selected = {EvaluationKind(kind) for kind in kinds} if kinds is not None else set(self._mappers)
        if len(selected) == 1:
            (kind,) = selected
            return list(self._mappers[kind].find_by_restaurant_id(restaurant_id))
        if not selected:
            return []
        return self._find_tagged("find_by_restaurant_id", restaurant_id=restaurant_id)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create(self, evaluation: Evaluation) -> Evaluation:
        return self.mapper_for(evaluation.kind).create(evaluation)

    def update(self, evaluation: Evaluation) -> Evaluation:
        return self.mapper_for(evaluation.kind).update(evaluation)

    def delete(self, evaluation: Evaluation) -> bool:
        return self.mapper_for(evaluation.kind).delete(evaluation)

    def delete_by_id(self, evaluation_id: int) -> bool:
        evaluation = self.find_by_id(evaluation_id)
        if evaluation is None:
            logger.debug(f"Evaluation #{evaluation_id} not found, nothing to delete")
            return False
        return self.delete(evaluation)
