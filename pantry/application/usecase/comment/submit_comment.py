"""Submit comment use case."""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, StringConstraints

from pantry.domain.service import (
    CommentService,
    ContentFilter,
    ModerationStateMachine,
    RecipeService,
    UserService,
)
from pantry.domain.value import ModerationStatus, RecipeId, Role, UserId


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    author_id: Optional[UUID] = None
    recipe_id: UUID
    content: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)
    ]


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    comment_id: str
    recipe_id: str
    status: ModerationStatus
    created_at: datetime


class SubmitCommentUseCase:
    """Use case for commenting on a recipe."""

    def __init__(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
        content_filter: ContentFilter,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            user_service: User domain service
            recipe_service: Recipe domain service
            comment_service: Comment domain service
            content_filter: Blocklist classifier for comment text
        """
        self.user_service = user_service
        self.recipe_service = recipe_service
        self.comment_service = comment_service
        self.content_filter = content_filter

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Clean text is approved straight away; text matching the blocklist
        waits in the review queue as pending.

        Raises:
            NotAuthenticatedError: If the author cannot be resolved
            ForbiddenError: If the author's account is not active
            NotFoundError: If the recipe does not exist
        """
        author = await self.user_service.authorize(
            UserId(request.author_id) if request.author_id else None,
            Role.USER,
            "comment on recipes",
        )
        recipe_id = RecipeId(request.recipe_id)
        await self.recipe_service.require_recipe(recipe_id)

        classification = self.content_filter.classify(request.content)
        status = ModerationStateMachine.initial_comment_status(classification)
        if status == ModerationStatus.PENDING:
            logfire.info(
                "Comment held for review",
                recipe_id=str(recipe_id),
                author_id=str(author.id),
                terms=self.content_filter.matches(request.content),
            )

        comment = await self.comment_service.create_comment(
            recipe_id=recipe_id,
            author=author,
            content=request.content,
            status=status,
        )

        return SubmitCommentResponse(
            comment_id=str(comment.id),
            recipe_id=str(comment.recipe_id),
            status=comment.status,
            created_at=comment.created_at,
        )
