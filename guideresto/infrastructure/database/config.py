"""
Database configuration.

Engine and session factory creation, and schema creation.
"""
import logging

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker

from ...data.models import Base

logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def build_engine(url: str, echo: bool = False, pool_pre_ping: bool = True) -> Engine:
    """
    Create SQLAlchemy engine.

    Args:
        url: Database URL
        echo: Log every SQL statement
        pool_pre_ping: Test connections before using

    Returns:
        Configured engine
    """
    logger.info(f"Creating database engine: {url}")
    engine = create_engine(url, echo=echo, pool_pre_ping=pool_pre_ping)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def _configure_sqlite(engine: Engine) -> None:
    """
    Enforce foreign keys and let SQLAlchemy drive transactions.

    pysqlite defers BEGIN until the first write, which breaks SAVEPOINT
    scoping; the driver's own handling is turned off and BEGIN is emitted
    by the "begin" event instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


# =============================================================================
# SESSION FACTORY
# =============================================================================

def create_session_factory(bind: Engine) -> sessionmaker:
    """
    Session factory for units of work.

    Objects stay usable after commit; mappers flush explicitly.
    """
    return sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


# =============================================================================
# SCHEMA
# =============================================================================

def init_database(bind: Engine) -> None:
    """Create every table (and sequence, where supported)."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind)
    logger.info("✅ Database tables created")
