from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Settings for the relational store.
    Loaded automatically from the environment with prefix GUIDERESTO_DB_*
    """

    url: str = "sqlite:///guideresto.db"
    echo_sql: bool = False
    pool_pre_ping: bool = True
    # auto | native | table
    sequence_strategy: str = "auto"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GUIDERESTO_DB_",
        "extra": "ignore",
    }
