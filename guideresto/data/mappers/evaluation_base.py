"""Shared behaviour of the LIKES and COMMENTAIRES mappers."""
from typing import List, Optional, TypeVar

from ...domain.entities import Evaluation
from ..identity_cache import IdentityCache
from ..sequences import SequenceAllocator
from .base import AbstractMapper
from .restaurant_mapper import RestaurantMapper

V = TypeVar("V", bound=Evaluation)


class ConcreteEvaluationMapper(AbstractMapper[V]):
    """
    Mapper for one concrete evaluation table.

    Keeps ``Restaurant.evaluations`` in step and registers itself with the
    restaurant mapper so a restaurant delete evicts its evaluations.
    """

    def __init__(
        self,
        session,
        sequences: SequenceAllocator,
        restaurants: RestaurantMapper,
        cache: Optional[IdentityCache[V]] = None,
    ):
        super().__init__(session, sequences, cache)
        self._restaurants = restaurants
        restaurants.register_dependent(self)

    def _restaurant_order(self):
        return (self.model.id,)

    def find_by_restaurant_id(self, restaurant_id: int) -> List[V]:
        statement = (
            self._select()
            .where(self.model.restaurant_id == restaurant_id)
            .order_by(*self._restaurant_order())
        )
        return self._all(statement, "find_by_restaurant_id")

    def evict_for_restaurant(self, restaurant_id: int) -> List[V]:
        """Drop every cached evaluation of ``restaurant_id``."""
        evicted = self.cache.evict_where(lambda evaluation: evaluation.restaurant.id == restaurant_id)
        for evaluation in evicted:
            evaluation.restaurant.evaluations.discard(evaluation)
        return evicted

    def _on_loaded(self, evaluation: V) -> None:
        evaluation.restaurant.evaluations.add(evaluation)

    def _on_updated(self, evaluation: V) -> None:
        for restaurant in self._restaurants.cache:
            if restaurant is not evaluation.restaurant:
                restaurant.evaluations.discard(evaluation)
        evaluation.restaurant.evaluations.add(evaluation)

    def _on_deleted(self, evaluation: V) -> None:
        evaluation.restaurant.evaluations.discard(evaluation)
