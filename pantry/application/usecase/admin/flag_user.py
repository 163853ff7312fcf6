"""Flag user account use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pantry.application.usecase.base import BaseUseCase
from pantry.config import ModerationSettings
from pantry.domain.error import ForbiddenError
from pantry.domain.service import AuditRecorder, UserService
from pantry.domain.value import AccountStatus, AuditAction, EntityType, Role, UserId


class FlagUserRequest(BaseModel):
    """Flag user request."""

    actor_id: Optional[UUID] = None
    user_id: UUID
    reason: Optional[str] = None


class FlagUserResponse(BaseModel):
    """Flag user response."""

    user_id: str
    username: str
    status: AccountStatus
    is_flagged: bool
    flag_reason: Optional[str]
    flagged_at: Optional[datetime]
    audit_recorded: bool


class FlagUserUseCase(BaseUseCase):
    """Use case for flagging an account for admin attention."""

    def __init__(
        self,
        user_service: UserService,
        audit_recorder: AuditRecorder,
        settings: ModerationSettings,
    ) -> None:
        self.user_service = user_service
        self.audit_recorder = audit_recorder
        self.settings = settings

    async def execute(self, request: FlagUserRequest) -> FlagUserResponse:
        """Execute flag user flow.

        Flagging leaves the account status alone. A moderator may not flag
        an account whose role outranks their own.

        Raises:
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator or outranked by
                the target
            NotFoundError: If the target user does not exist
        """
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "flag users",
        )
        target = await self.user_service.get_by_id(UserId(request.user_id))
        if target.role.rank > actor.role.rank:
            raise ForbiddenError(f"flag a {target.role.value} account", str(actor.id))

        reason = request.reason or self.settings.default_flag_reason
        flagged = await self.user_service.flag(target, actor, reason)

        entry = await self.audit_recorder.record(
            entity_id=target.id,
            entity_type=EntityType.USER,
            snapshot=target,
            actor=actor,
            action=AuditAction.FLAG,
            reason=reason,
            entity_title=target.username,
        )

        return FlagUserResponse(
            user_id=str(flagged.id),
            username=flagged.username,
            status=flagged.status,
            is_flagged=flagged.is_flagged,
            flag_reason=flagged.flag_reason,
            flagged_at=flagged.flagged_at,
            audit_recorded=entry is not None,
        )
