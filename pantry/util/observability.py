"""Logfire setup.

Domain services and the facade log through logfire directly:

    logfire.info("Recipe approved", recipe_id=str(recipe.id))

    with logfire.span("rating_aggregator.submit", recipe_id=str(recipe_id)):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from pantry.config import Settings

SERVICE_NAME = "pantry-moderation"
SERVICE_VERSION = "0.1.0"


def should_send_to_logfire(settings: Settings) -> bool:
    """Explicit ``send_to_logfire`` wins; otherwise send only with a token."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire export and console output.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement the engine runs, tagged with the active span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
