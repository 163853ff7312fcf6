"""List comment review queue use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from pantry.domain.service import CommentService, UserService
from pantry.domain.value import ModerationStatus, Role, UserId


class ListCommentQueueRequest(BaseModel):
    """List comment queue request."""

    actor_id: Optional[UUID] = None
    flagged_only: bool = False
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class QueuedComment(BaseModel):
    """Comment awaiting a moderator."""

    comment_id: str
    recipe_id: str
    author_username: str
    content: str
    status: ModerationStatus
    is_flagged: bool
    flag_reason: Optional[str]
    flagged_at: Optional[datetime]
    created_at: datetime


class ListCommentQueueResponse(BaseModel):
    """List comment queue response."""

    comments: list[QueuedComment]
    flagged_only: bool
    limit: int
    offset: int


class ListCommentQueueUseCase:
    """Use case for listing comments that need attention.

    Pending comments come oldest first; flagged comments newest first.
    """

    def __init__(
        self, user_service: UserService, comment_service: CommentService
    ) -> None:
        self.user_service = user_service
        self.comment_service = comment_service

    async def execute(self, request: ListCommentQueueRequest) -> ListCommentQueueResponse:
        """Execute list comment queue flow."""
        await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "review comments",
        )

        if request.flagged_only:
            comments = await self.comment_service.list_flagged(
                limit=request.limit, offset=request.offset
            )
        else:
            comments = await self.comment_service.list_pending(
                limit=request.limit, offset=request.offset
            )

        return ListCommentQueueResponse(
            comments=[
                QueuedComment(
                    comment_id=str(c.id),
                    recipe_id=str(c.recipe_id),
                    author_username=c.author_username,
                    content=c.content,
                    status=c.status,
                    is_flagged=c.is_flagged,
                    flag_reason=c.flag_reason,
                    flagged_at=c.flagged_at,
                    created_at=c.created_at,
                )
                for c in comments
            ],
            flagged_only=request.flagged_only,
            limit=request.limit,
            offset=request.offset,
        )
