"""Dependency injection wiring for the moderation engine."""

from typing import Type

from pantry.util.di.application import ProdApplicationProvider
from pantry.util.di.base import Component, ProviderBase
from pantry.util.di.core import ProdConfigProvider
from pantry.util.di.domain import ProdDomainProvider
from pantry.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

# Concrete providers are used as-is; component bases resolve to a subclass
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve an entry of ``PROVIDERS`` to the class to instantiate.

    A base without subclasses is itself concrete. A component base is
    swapped for the subclass whose ``__is_mock__`` equals ``use_mock``.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
