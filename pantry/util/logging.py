"""Stdlib logging setup.

Structured events go through logfire; this only routes and levels the
plain ``logging`` output of pantry and the libraries underneath it.
"""

import logging
import sys

from pantry.config import Settings

# Library loggers and the least severe level they may emit at
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "asyncpg": logging.WARNING,
    "alembic": logging.INFO,
}


def resolve_level(settings: Settings) -> int:
    """Pick the pantry log level.

    An explicit ``OBSERVABILITY__LOG_LEVEL`` wins, then debug mode. Otherwise
    production logs warnings and everything else logs info.

    Raises:
        ValueError: If the explicit level name is not a logging level
    """
    explicit = settings.observability.log_level
    if explicit:
        level = logging.getLevelName(explicit.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {explicit!r}")
        return level
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root handler and per-library levels.

    Args:
        settings: Application settings
    """
    level = resolve_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name, floor in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(max(level, floor))
    logging.getLogger("pantry").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
