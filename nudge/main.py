"""Process entry point for Nudge: load settings, prepare the database, seed in development."""

import logging
import sys

from nudge.config import Settings
from nudge.database.database import (
    build_engine,
    create_indexes,
    create_session_factory,
    init_db,
    transaction,
)
from nudge.database.seed import seed

logger = logging.getLogger("nudge")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    logger.info("Nudge - Starting application...")
    logger.info(f"Configuration loaded - Environment: {settings.env}, DB: {settings.db_url}")

    try:
        engine = build_engine(settings)
    except Exception as e:
        logger.error(f"Failed to connect to database: {type(e).__name__}: {str(e)}")
        return 1

    try:
        init_db(engine, settings)
        create_indexes(engine)
        if settings.is_development:
            with transaction(create_session_factory(engine)) as db:
                seed(db, settings)
    except Exception as e:
        logger.error(f"Failed to initialize database: {type(e).__name__}: {str(e)}")
        return 1
    finally:
        engine.dispose()

    logger.info("Database initialized successfully")
    logger.info("Nudge is ready!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
