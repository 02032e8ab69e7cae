"""Database connection and session management for Nudge.

This module supports both:
- Local SQLite file (default for development)
- Remote libSQL/Turso endpoint, selected when an auth token is configured

The engine is built from an explicit Settings value; nothing here is created at import time.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from nudge.config import Settings

logger = logging.getLogger(__name__)

# Base class for declarative models
Base = declarative_base()

LIBSQL_DIALECT_PREFIX = "sqlite+libsql://"


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _is_memory_url(database_url: str) -> bool:
    return ":memory:" in (database_url or "")


def normalize_local_url(db_url: str) -> str:
    """Turn a `file:` style path into an SQLAlchemy SQLite URL.

    `file:local.db` becomes `sqlite:///local.db`; SQLAlchemy URLs pass through.
    """
    if db_url.startswith("file:"):
        path = db_url[len("file:"):].split("?", 1)[0]
        return f"sqlite:///{path}"
    if "://" not in db_url:
        return f"sqlite:///{db_url}"
    return db_url


def normalize_remote_url(db_url: str) -> str:
    """Turn a libSQL/Turso URL into the `sqlite+libsql` dialect URL.

    `libsql://db-org.turso.io` becomes `sqlite+libsql://db-org.turso.io?secure=true`.
    """
    if db_url.startswith(LIBSQL_DIALECT_PREFIX):
        return db_url
    for scheme in ("libsql://", "https://", "wss://"):
        if db_url.startswith(scheme):
            host = db_url[len(scheme):]
            separator = "&" if "?" in host else "?"
            return f"{LIBSQL_DIALECT_PREFIX}{host}{separator}secure=true"
    return db_url


def resolve_database_url(settings: Settings) -> str:
    """Return the SQLAlchemy URL for the configured database."""
    if settings.uses_remote_database:
        return normalize_remote_url(settings.db_url)
    return normalize_local_url(settings.db_url)


def get_engine_kwargs(settings: Settings) -> dict:
    """Return deterministic create_engine kwargs for the configured database.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": settings.debug,
    }

    if settings.uses_remote_database:
        engine_kwargs["connect_args"] = {"auth_token": settings.db_token}
        # Helps avoid stale connections to the remote endpoint.
        engine_kwargs["pool_pre_ping"] = True
        return engine_kwargs

    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if _is_memory_url(resolve_database_url(settings)):
        # One shared connection keeps the in-memory database alive.
        engine_kwargs["poolclass"] = StaticPool
        return engine_kwargs

    # SQLite works best with a single connection.
    engine_kwargs["pool_size"] = 1
    engine_kwargs["max_overflow"] = 0
    return engine_kwargs


def set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable foreign keys on each new connection (required for cascading deletes)."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database."""
    if settings.uses_remote_database:
        logger.info("Connecting to Turso database...")
    else:
        logger.info("Connecting to local SQLite database...")

    database_url = resolve_database_url(settings)
    engine = create_engine(database_url, **get_engine_kwargs(settings))
    if _is_sqlite_url(database_url):
        event.listen(engine, "connect", set_sqlite_pragmas)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def transaction(session_factory: sessionmaker) -> Iterator[Session]:
    """Run a block in a session that commits on success and rolls back on error."""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine, settings: Settings) -> None:
    """Initialize database schema.

    - Default: `create_all()` for the task and recurring task tables.
    - Set `RUN_MIGRATIONS=true` to apply Alembic migrations instead.
    """
    logger.info("Running database migrations...")
    if settings.run_migrations:
        from alembic import command
        from alembic.config import Config

        alembic_cfg = Config(settings.alembic_ini)
        # Ensure Alembic migrates the same database this engine points at.
        alembic_cfg.set_main_option("sqlalchemy.url", str(engine.url).replace("%", "%%"))
        with engine.begin() as connection:
            alembic_cfg.attributes["connection"] = connection
            command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
        return

    # Register ORM models on Base.metadata
    from nudge.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database migrations completed successfully")


# Indexes beyond the per-column ones declared on the models.
CUSTOM_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status_completed_at ON tasks (status, completed_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_type_status ON tasks (task_type, status)",
    "CREATE INDEX IF NOT EXISTS idx_recurring_tasks_active ON recurring_tasks (is_active)",
]


def create_indexes(engine: Engine) -> None:
    """Create custom indexes (idempotent)."""
    logger.info("Creating custom indexes...")
    with engine.begin() as conn:
        for statement in CUSTOM_INDEXES:
            conn.execute(text(statement))
    logger.info("Custom indexes created successfully")


def drop_all_tables(engine: Engine) -> None:
    """Drop all tables (use with caution!)."""
    from nudge.database import models  # noqa: F401

    logger.warning("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)
