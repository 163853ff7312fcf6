"""Process start-up for hosts embedding the moderation engine."""

from typing import Optional

from dishka import AsyncContainer

from pantry.config import Settings
from pantry.util.di.container import create_container
from pantry.util.logging import setup_logging
from pantry.util.observability import configure_logfire


async def bootstrap(container: Optional[AsyncContainer] = None) -> AsyncContainer:
    """Build the DI container, then configure logging and observability.

    Logging and logfire are set up from the container's own ``Settings``, so
    the process reads its environment once. Callers open a request scope per
    operation and resolve ``ModerationService`` from it:

        container = await bootstrap()
        async with container() as request:
            service = await request.get(ModerationService)
            result = await service.rate(user_id, recipe_id, 4)
        await container.close()

    Args:
        container: Prebuilt container; defaults to the production one
    """
    container = container or create_container()
    settings = await container.get(Settings)
    setup_logging(settings)
    configure_logfire(settings)
    return container
