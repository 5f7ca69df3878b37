"""
Composition root.

Builds the engine, the session factory and the services once, from
settings read after ``.env`` has been loaded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from guideresto.application.services import EvaluationService, RestaurantService
from guideresto.infrastructure.database import build_engine, create_session_factory, init_database
from guideresto.infrastructure.logging import configure_logging
from guideresto.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_env_loaded = False


def load_environment(dotenv_path: Optional[Path] = None) -> None:
    """Load environment variables ONCE before any settings objects are created."""
    global _env_loaded
    if not _env_loaded:
        load_dotenv(dotenv_path=dotenv_path or _PROJECT_ROOT / ".env")
        _env_loaded = True


@dataclass
class Application:
    """Everything a caller needs, wired once."""
    settings: AppSettings
    engine: Engine
    session_factory: sessionmaker
    restaurants: RestaurantService
    evaluations: EvaluationService

    def close(self) -> None:
        self.engine.dispose()


def create_application(settings: Optional[AppSettings] = None, create_schema: bool = True) -> Application:
    """
    Wire the application.

    Args:
        settings: Explicit settings; read from the environment when omitted
        create_schema: Create missing tables on startup

    Returns:
        Application holding the engine and both services
    """
    if settings is None:
        load_environment()
        settings = get_app_settings()

    configure_logging(settings.logging)
    database = settings.database
    engine = build_engine(database.url, echo=database.echo_sql, pool_pre_ping=database.pool_pre_ping)
    if create_schema:
        init_database(engine)
    session_factory = create_session_factory(engine)

    logger.info(f"GuideResto ready on {engine.url.render_as_string(hide_password=True)}")
    return Application(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        restaurants=RestaurantService(session_factory, database.sequence_strategy),
        evaluations=EvaluationService(session_factory, database.sequence_strategy),
    )
