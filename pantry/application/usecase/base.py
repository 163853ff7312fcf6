"""Use case base."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One operation: takes a request model, returns a response model."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
