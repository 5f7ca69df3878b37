"""Mapper contract shared by every entity type."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

E = TypeVar("E")


class EntityMapper(ABC, Generic[E]):
    """Abstract data mapper for one entity type.

    Implementations run inside a unit of work owned by the caller: they are
    handed the session, never open, commit or close it.
    """

    @abstractmethod
    def find_by_id(self, entity_id: int) -> Optional[E]:
        """Retrieve an entity by identifier.

        Args:
            entity_id: Numeric identifier

        Returns:
            The single live instance for that id, None if no row exists
        """
        pass

    @abstractmethod
    def find_all(self) -> List[E]:
        """Retrieve every entity of this type.

        Returns:
            List of entities, one instance per id
        """
        pass

    @abstractmethod
    def create(self, entity: E) -> E:
        """Persist a new entity and assign its identifier.

        Args:
            entity: Entity without id

        Returns:
            The same entity with ``id`` populated
        """
        pass

    @abstractmethod
    def update(self, entity: E) -> E:
        """Write an existing entity back to its row.

        Args:
            entity: Entity carrying the version it was loaded with

        Returns:
            The same entity with its version advanced

        Raises:
            ConflictError: If the stored version differs
            EntityNotFoundError: If the row no longer exists
        """
        pass

    @abstractmethod
    def delete(self, entity: E) -> bool:
        """Remove an entity and the rows it owns.

        Args:
            entity: Entity to delete

        Returns:
            True if a row was removed, False if it was already absent

        Raises:
            ConflictError: If the stored version differs
        """
        pass

    @abstractmethod
    def delete_by_id(self, entity_id: int) -> bool:
        """Remove an entity by identifier.

        Args:
            entity_id: Numeric identifier

        Returns:
            True if a row was removed, False if it was already absent
        """
        pass
