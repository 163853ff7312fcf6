"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary around one moderation operation.

    Writes made between ``begin`` and ``commit`` become visible together;
    ``rollback`` discards them.
    """

    @abstractmethod
    async def begin(self) -> None:
        """Start a unit of work."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make the unit's writes durable."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard the unit's writes."""
        pass
