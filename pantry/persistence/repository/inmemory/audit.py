"""In-memory audit repository for testing."""

from typing import List
from uuid import UUID

from pantry.domain.model.audit import AuditEntry
from pantry.domain.repository.audit import AuditRepository
from pantry.domain.value import EntityType

from .store import InMemoryStore


class InMemoryAuditRepository(AuditRepository):
    """In-memory implementation of AuditRepository for testing.

    Set ``fail_appends`` to simulate an unavailable audit table.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()
        self.fail_appends = False

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry."""
        if self.fail_appends:
            raise ConnectionError("audit_log unavailable")
        self._store.audit_log.append(entry)
        return entry

    async def find_by_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> List[AuditEntry]:
        """Find audit entries for an entity, oldest first."""
        return [
            e
            for e in self._store.audit_log
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
