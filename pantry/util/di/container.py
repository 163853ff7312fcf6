"""Production container."""

from dishka import AsyncContainer, make_async_container

from pantry.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with every component on its PostgreSQL side.

    Settings are read from the environment when first resolved.
    """
    return make_async_container(
        *(get_provider(base, use_mock=False)() for base in PROVIDERS)
    )
