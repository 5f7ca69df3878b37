"""
Identity cache.

One cache per entity type per unit of work. Guarantees that two lookups
of the same id return the same object, so a change made through one
handle is visible through every other handle.
"""
import logging
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


class IdentityCache(Generic[E]):
    """
    Explicit id -> entity map.

    No eviction policy: entries live until ``evict``/``clear`` or until the
    owning unit of work ends.
    """

    def __init__(self, name: str = "entity"):
        self.name = name
        self._entries: Dict[int, E] = {}

    def get(self, entity_id: Optional[int]) -> Optional[E]:
        if entity_id is None:
            return None
        return self._entries.get(entity_id)

    def put(self, entity: E) -> E:
        """Index ``entity`` by its id, replacing any previous entry."""
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            raise ValueError(f"Cannot cache a {self.name} without id")
        self._entries[entity_id] = entity
        return entity

    def evict(self, entity_id: Optional[int]) -> Optional[E]:
        """Remove and return the entry for ``entity_id``, if any."""
        if entity_id is None:
            return None
        return self._entries.pop(entity_id, None)

    def evict_where(self, predicate: Callable[[E], bool]) -> List[E]:
        """Remove every entry matching ``predicate`` and return them."""
        evicted = [entity for entity in self._entries.values() if predicate(entity)]
        for entity in evicted:
            del self._entries[entity.id]
        if evicted:
            logger.debug(f"Evicted {len(evicted)} {self.name} entries")
        return evicted

    def clear(self) -> None:
        logger.debug(f"Clearing {self.name} cache ({len(self._entries)} entries)")
        self._entries.clear()

    def values(self) -> List[E]:
        return list(self._entries.values())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entries.values()))
