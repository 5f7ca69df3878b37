from pydantic_settings import BaseSettings


class LoggingSettings(BaseSettings):
    """
    Logging level and line format.
    Loaded automatically from the environment with prefix GUIDERESTO_LOG_*
    """

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GUIDERESTO_LOG_",
        "extra": "ignore",
    }
