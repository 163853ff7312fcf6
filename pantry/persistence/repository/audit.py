"""PostgreSQL implementation of Audit repository."""

from typing import List
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.model import AuditEntry
from pantry.domain.repository import AuditRepository
from pantry.domain.value import EntityType
from pantry.persistence.mappers import audit_entry_to_dict, row_to_audit_entry
from pantry.persistence.tables import audit_log_table


class PostgresAuditRepository(AuditRepository):
    """PostgreSQL implementation of AuditRepository.

    Each append runs in a savepoint, so a failed insert leaves the
    surrounding transaction usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry inside a savepoint."""
        async with self.session.begin_nested():
            stmt = audit_log_table.insert().values(**audit_entry_to_dict(entry))
            await self.session.execute(stmt)
        return entry

    async def find_by_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> List[AuditEntry]:
        """Find audit entries for an entity, oldest first."""
        stmt = (
            select(audit_log_table)
            .where(
                and_(
                    audit_log_table.c.entity_type == entity_type.value,
                    audit_log_table.c.entity_id == entity_id,
                )
            )
            .order_by(audit_log_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_entry(dict(row)) for row in result.mappings().all()]
