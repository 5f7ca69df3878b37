from .app import AppSettings, get_app_settings
from .sections import DatabaseSettings, LoggingSettings

__all__ = ["AppSettings", "DatabaseSettings", "LoggingSettings", "get_app_settings"]
