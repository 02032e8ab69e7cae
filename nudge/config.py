"""Application settings for Nudge.

Settings are read from the environment (and an optional `.env` file) once at process
start and then passed explicitly to the database layer. There is no global settings object.
"""

import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

DEFAULT_DB_URL = "file:local.db"
ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    return _env(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Environment-derived configuration."""

    db_url: str = Field(DEFAULT_DB_URL, description="Local SQLite file or remote libSQL URL")
    db_token: str = Field("", description="Auth token for the remote database (empty = local)")
    env: str = Field(ENV_DEVELOPMENT, description="Deployment environment")
    debug: bool = Field(False, description="Echo SQL statements")
    log_level: str = Field("INFO", description="Root log level")
    run_migrations: bool = Field(False, description="Use Alembic instead of create_all()")
    alembic_ini: str = Field("alembic.ini", description="Path to alembic.ini")

    class Config:
        """Pydantic configuration."""
        frozen = True

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables.

        Args:
            dotenv: Load a `.env` file first if one exists (never overrides the real env)
        """
        if dotenv:
            load_dotenv()
        return cls(
            db_url=_env("DB_URL", DEFAULT_DB_URL),
            db_token=_env("DB_TOKEN", ""),
            env=_env("ENV", ENV_DEVELOPMENT).lower(),
            debug=_env_bool("DEBUG"),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            run_migrations=_env_bool("RUN_MIGRATIONS"),
            alembic_ini=_env("ALEMBIC_INI", "alembic.ini"),
        )

    @property
    def is_development(self) -> bool:
        return self.env == ENV_DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.env == ENV_PRODUCTION

    @property
    def uses_remote_database(self) -> bool:
        """A token selects the remote authenticated endpoint."""
        return bool(self.db_token)
