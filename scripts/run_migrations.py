#!/usr/bin/env python3
"""Upgrade the pantry schema to head, reporting failures to Logfire."""

import asyncio
import sys

import logfire
from alembic import command
from alembic.config import Config

from pantry.config import Settings
from pantry.util.bootstrap import bootstrap


async def _start() -> Settings:
    container = await bootstrap()
    try:
        return await container.get(Settings)
    finally:
        await container.close()


def main() -> int:
    # Alembic's env.py runs its own event loop, so the container is closed first
    settings = asyncio.run(_start())

    try:
        with logfire.span("Upgrading schema", environment=settings.environment):
            command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Schema is at head")
        return 0

    except Exception as e:
        logfire.error(
            "Schema upgrade failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy never proceeds against a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main())
