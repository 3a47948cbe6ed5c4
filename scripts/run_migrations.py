#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import argparse
import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from teamdesk.config import Settings
from teamdesk.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main() -> int:
    """Upgrade the schema and log any errors to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("revision", nargs="?", default="head", help="Target revision")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings, service_name="teamdesk-migrations")

    try:
        logfire.info("Starting database migrations", revision=args.revision)

        alembic_cfg = Config(str(ALEMBIC_INI))
        command.upgrade(alembic_cfg, args.revision)

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
