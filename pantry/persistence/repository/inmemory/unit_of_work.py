"""In-memory unit of work for testing."""

from pantry.domain.repository.unit_of_work import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work that restores a snapshot of the store on rollback."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._snapshot: dict | None = None
        self.commits = 0
        self.rollbacks = 0

    async def begin(self) -> None:
        self._snapshot = self._store.snapshot()

    async def commit(self) -> None:
        self._snapshot = None
        self.commits += 1

    async def rollback(self) -> None:
        if self._snapshot is not None:
            self._store.restore(self._snapshot)
            self._snapshot = None
        self.rollbacks += 1
