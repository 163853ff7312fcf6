"""Audit trail domain service."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from pantry.domain.model import AuditEntry, User
from pantry.domain.repository import AuditRepository
from pantry.domain.value import AuditAction, AuditEntryId, EntityType

from .base import Service


class AuditRecorder(Service):
    """Append moderation and deletion decisions to the audit trail.

    Recording is best-effort: a failed write is logged and reported as
    ``None`` but never raised, so the decision it describes stands.
    """

    def __init__(
        self,
        audit_repository: AuditRepository,
        default_reason: str = "No reason provided",
    ) -> None:
        """Initialize audit recorder.

        Args:
            audit_repository: Audit repository
            default_reason: Reason stored when the actor gave none
        """
        self.audit_repository = audit_repository
        self.default_reason = default_reason

    async def record(
        self,
        entity_id: UUID,
        entity_type: EntityType,
        snapshot: BaseModel | dict[str, Any],
        actor: User,
        action: AuditAction,
        reason: Optional[str] = None,
        entity_title: Optional[str] = None,
    ) -> AuditEntry | None:
        """Append one audit entry.

        Args:
            entity_id: ID of the affected entity
            entity_type: Type of the affected entity
            snapshot: Entity state before the action
            actor: User who took the action
            action: Kind of decision
            reason: Actor's reason, if any
            entity_title: Human-readable label for the entity

        Returns:
            The stored entry, or None if the write failed
        """
        if isinstance(snapshot, BaseModel):
            snapshot = snapshot.model_dump(mode="json")

        try:
            entry = AuditEntry(
                id=AuditEntryId(uuid4()),
                entity_id=entity_id,
                entity_type=entity_type,
                entity_title=entity_title,
                snapshot=snapshot,
                actor_id=actor.id,
                actor_username=actor.username,
                action=action,
                reason=reason or self.default_reason,
                created_at=datetime.now(),
            )
            saved = await self.audit_repository.append(entry)
        except Exception as e:
            logfire.error(
                "Audit write failed",
                entity_id=str(entity_id),
                entity_type=entity_type.value,
                action=action.value,
                actor_id=str(actor.id),
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=True,
            )
            return None

        logfire.info(
            "Audit entry recorded",
            audit_id=str(saved.id),
            entity_id=str(entity_id),
            entity_type=entity_type.value,
            action=action.value,
            actor_id=str(actor.id),
        )
        return saved
