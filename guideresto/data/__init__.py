"""Data layer - row models, mappers and the unit of work."""

from .identity_cache import IdentityCache
from .uow import UnitOfWork, create_uow

__all__ = ["IdentityCache", "UnitOfWork", "create_uow"]
