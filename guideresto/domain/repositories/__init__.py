"""Repository interfaces."""

from .entity_mapper import EntityMapper

__all__ = ["EntityMapper"]
