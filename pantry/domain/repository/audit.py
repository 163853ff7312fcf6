"""Audit repository interface."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from pantry.domain.model.audit import AuditEntry
from pantry.domain.value import EntityType


class AuditRepository(ABC):
    """Append-only repository for audit entries.

    There is deliberately no update or delete operation.
    """

    @abstractmethod
    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry.

        A failure must not affect writes already made in the same
        transaction.

        Args:
            entry: The entry to append

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    async def find_by_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> List[AuditEntry]:
        """Find audit entries for an entity, oldest first.

        Args:
            entity_type: Type of the audited entity
            entity_id: ID of the audited entity

        Returns:
            List of audit entries
        """
        pass
