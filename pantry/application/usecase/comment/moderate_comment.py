"""Moderate comment use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

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


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: UUID
    action: str
    actor_id: Optional[UUID] = None
    reason: Optional[str] = None


class ModerateCommentResponse(BaseModel):
    """Moderate comment response."""

    comment_id: str
    status: ModerationStatus
    is_flagged: bool
    audit_recorded: bool


class ModerateCommentUseCase:
    """Use case for reviewing a comment: approve, reject or unflag."""

    def __init__(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> None:
        """Initialize moderate comment use case.

        Args:
            user_service: User domain service
            comment_service: Comment domain service
            state_machine: Moderation transitions
            audit_recorder: Audit trail writer
        """
        self.user_service = user_service
        self.comment_service = comment_service
        self.state_machine = state_machine
        self.audit_recorder = audit_recorder

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderate comment flow.

        Raises:
            InvalidArgumentError: If the action token is unknown
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator
            NotFoundError: If the comment does not exist
        """
        action = self.state_machine.parse_action(request.action, EntityType.COMMENT)
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            f"{action.value} comments",
        )

        comment = await self.comment_service.require_comment(
            CommentId(request.comment_id)
        )
        moderated = self.state_machine.moderate_comment(
            comment, action, actor, reason=request.reason
        )
        saved = await self.comment_service.save(moderated)

        entry = await self.audit_recorder.record(
            entity_id=comment.id,
            entity_type=EntityType.COMMENT,
            snapshot=comment,
            actor=actor,
            action=AuditAction(action.value),
            reason=request.reason,
        )

        return ModerateCommentResponse(
            comment_id=str(saved.id),
            status=saved.status,
            is_flagged=saved.is_flagged,
            audit_recorded=entry is not None,
        )
