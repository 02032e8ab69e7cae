"""Alembic environment for Nudge.

When `init_db` runs migrations in-process it hands over its own connection (and sets
`sqlalchemy.url` to the engine's URL). From the command line the engine comes from the
same Settings/build_engine path the application uses, so the remote token and URL
normalization apply to migrations too.
"""

from logging.config import fileConfig

from alembic import context

from nudge.config import Settings
from nudge.database.database import Base, build_engine, resolve_database_url
from nudge.database import models  # noqa: F401

config = context.config

# The application configures logging itself when it passes a connection in.
if config.config_file_name is not None and config.attributes.get("connection") is None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url") or resolve_database_url(Settings.from_env())
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_with_connection(connection)
        return

    engine = build_engine(Settings.from_env())
    try:
        with engine.connect() as connection:
            _run_with_connection(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
