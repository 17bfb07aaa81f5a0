"""Logging configuration for the application.

Logfire handles the application's own events; this sets up the standard
library root logger that uvicorn, SQLAlchemy and asyncpg write to.
"""

import logging
import sys

from redditclone.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure standard library logging.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    # SQL echo is handled by the engine in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("redditclone").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
