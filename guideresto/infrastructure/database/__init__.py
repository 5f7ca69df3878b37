"""Database engine, session factory and schema creation."""

from .config import build_engine, create_session_factory, init_database

__all__ = [
    "build_engine",
    "create_session_factory",
    "init_database",
]
