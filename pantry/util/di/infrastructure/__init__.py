"""Providers for components backed by external systems."""

# ProdPersistenceProvider must be imported for PersistenceProvider.__subclasses__()
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
