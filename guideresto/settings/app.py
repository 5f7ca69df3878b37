# guideresto/settings/app.py
from functools import lru_cache

from guideresto.settings.sections.database import DatabaseSettings
from guideresto.settings.sections.logging import LoggingSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        self.database = DatabaseSettings()
        self.logging = LoggingSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
