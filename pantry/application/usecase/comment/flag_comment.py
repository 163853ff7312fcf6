"""Flag and unflag comment use cases."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pantry.config import ModerationSettings
from pantry.domain.service import (
    AuditRecorder,
    CommentService,
    ModerationStateMachine,
    UserService,
)
from pantry.domain.value import (
    AuditAction,
    CommentId,
    EntityType,
    ModerationStatus,
    Role,
    UserId,
)


class FlagCommentRequest(BaseModel):
    """Flag or unflag comment request."""

    comment_id: UUID
    actor_id: Optional[UUID] = None
    reason: Optional[str] = None


class FlagCommentResponse(BaseModel):
    """Flag or unflag comment response."""

    comment_id: str
    status: ModerationStatus
    is_flagged: bool
    flag_reason: Optional[str]
    flagged_at: Optional[datetime]
    audit_recorded: bool


class FlagCommentUseCase:
    """Use case for flagging a comment for review.

    Flagging never changes the comment's status.
    """

    def __init__(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
        settings: ModerationSettings,
    ) -> None:
        self.user_service = user_service
        self.comment_service = comment_service
        self.state_machine = state_machine
        self.audit_recorder = audit_recorder
        self.settings = settings

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute flag comment flow.

        Raises:
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator
            NotFoundError: If the comment does not exist
        """
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "flag comments",
        )
        comment = await self.comment_service.require_comment(
            CommentId(request.comment_id)
        )

        reason = request.reason or self.settings.default_flag_reason
        saved = await self.comment_service.save(
            self.state_machine.flag(comment, actor, reason)
        )

        entry = await self.audit_recorder.record(
            entity_id=comment.id,
            entity_type=EntityType.COMMENT,
            snapshot=comment,
            actor=actor,
            action=AuditAction.FLAG,
            reason=reason,
        )

        return FlagCommentResponse(
            comment_id=str(saved.id),
            status=saved.status,
            is_flagged=saved.is_flagged,
            flag_reason=saved.flag_reason,
            flagged_at=saved.flagged_at,
            audit_recorded=entry is not None,
        )


class UnflagCommentUseCase:
    """Use case for clearing a comment's flag without reviewing it."""

    def __init__(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> None:
        self.user_service = user_service
        self.comment_service = comment_service
        self.state_machine = state_machine
        self.audit_recorder = audit_recorder

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute unflag comment flow.

        Raises:
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator
            NotFoundError: If the comment does not exist
        """
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "unflag comments",
        )
        comment = await self.comment_service.require_comment(
            CommentId(request.comment_id)
        )

        saved = await self.comment_service.save(
            self.state_machine.unflag(comment, actor)
        )

        entry = await self.audit_recorder.record(
            entity_id=comment.id,
            entity_type=EntityType.COMMENT,
            snapshot=comment,
            actor=actor,
            action=AuditAction.UNFLAG,
            reason=request.reason,
        )

        return FlagCommentResponse(
            comment_id=str(saved.id),
            status=saved.status,
            is_flagged=saved.is_flagged,
            flag_reason=saved.flag_reason,
            flagged_at=saved.flagged_at,
            audit_recorded=entry is not None,
        )
