"""Moderation dashboard statistics use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from pantry.domain.service import CommentService, RecipeService, UserService
from pantry.domain.value import ModerationStatus, Role, UserId


class GetModerationStatsRequest(BaseModel):
    """Get moderation stats request."""

    actor_id: Optional[UUID] = None


class GetModerationStatsResponse(BaseModel):
    """Get moderation stats response."""

    recipes_by_status: dict[ModerationStatus, int]
    published_recipes: int
    total_comments: int
    pending_comments: int
    flagged_comments: int


class GetModerationStatsUseCase:
    """Use case for the counts shown on the moderation dashboard."""

    def __init__(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
    ) -> None:
        self.user_service = user_service
        self.recipe_service = recipe_service
        self.comment_service = comment_service

    async def execute(
        self, request: GetModerationStatsRequest
    ) -> GetModerationStatsResponse:
        """Execute get moderation stats flow."""
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "view moderation stats",
        )

        with logfire.span("get_moderation_stats", actor_id=str(actor.id)):
            recipes_by_status = await self.recipe_service.count_by_status()
            published = await self.recipe_service.count_published()
            comments_by_status = await self.comment_service.count_by_status()
            flagged = await self.comment_service.count_flagged()

        return GetModerationStatsResponse(
            recipes_by_status=recipes_by_status,
            published_recipes=published,
            total_comments=sum(comments_by_status.values()),
            pending_comments=comments_by_status[ModerationStatus.PENDING],
            flagged_comments=flagged,
        )
