"""Audit entry entity.

Append-only record of a moderation, deletion or account decision.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from pantry.domain.model.common import DomainModel
from pantry.domain.value import AuditAction, AuditEntryId, EntityType, UserId


class AuditEntry(DomainModel):
    """Immutable audit record.

    ``snapshot`` holds the entity as it was before the action, serialized to
    JSON-compatible values. ``reason`` is never empty; a placeholder is stored
    when the actor gave none.
    """

    id: AuditEntryId
    entity_id: UUID
    entity_type: EntityType
    entity_title: Optional[str] = None
    snapshot: dict[str, Any] = Field(default_factory=dict)
    actor_id: UserId
    actor_username: str
    action: AuditAction
    reason: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)
