#!/usr/bin/env python3
"""Upgrade the posts schema with Logfire error tracking.

Usage:
    python scripts/run_migrations.py [REVISION]

REVISION defaults to ``head``. Nothing is migrated when the in-memory
backend is configured.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from redditclone.config import Settings
from redditclone.util.logging import setup_logging
from redditclone.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade to the requested revision and log any failure to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    if settings.persistence.backend != "postgres":
        logfire.info("No schema to migrate", backend=settings.persistence.backend)
        return 0

    revision = argv[0] if argv else "head"
    alembic_cfg = Config("alembic.ini")

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve a stale schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
