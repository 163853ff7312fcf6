"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from pantry.domain.error import NotFoundError
from pantry.domain.model import Comment, User
from pantry.domain.repository import CommentRepository
from pantry.domain.value import CommentId, ModerationStatus, RecipeId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        recipe_id: RecipeId,
        author: User,
        content: str,
        status: ModerationStatus,
    ) -> Comment:
        """Create a comment on a recipe.

        Args:
            recipe_id: Recipe ID
            author: Comment author
            content: Comment text, stored trimmed
            status: Initial status picked from the content classification

        Returns:
            Created comment
        """
        with logfire.span(
            "comment_service.create_comment",
            recipe_id=str(recipe_id),
            author_id=str(author.id),
            status=status.value,
        ):
            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                recipe_id=recipe_id,
                author_id=author.id,
                author_username=author.username,
                content=content.strip(),
                status=status,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                recipe_id=str(recipe_id),
                status=status.value,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def require_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID or fail.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Persist a comment after a transition."""
        with logfire.span(
            "comment_service.save",
            comment_id=str(comment.id),
            status=comment.status.value,
            is_flagged=comment.is_flagged,
        ):
            return await self.comment_repository.save(comment)

    async def delete_for_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every comment on a recipe (deletion cascade only)."""
        with logfire.span(
            "comment_service.delete_for_recipe", recipe_id=str(recipe_id)
        ):
            deleted = await self.comment_repository.delete_by_recipe(recipe_id)
            logfire.info(
                "Comments deleted for recipe", recipe_id=str(recipe_id), count=deleted
            )
            return deleted

    async def list_pending(self, limit: int = 50, offset: int = 0) -> list[Comment]:
        """List comments awaiting review, oldest first."""
        return await self.comment_repository.find_by_status(
            ModerationStatus.PENDING, limit=limit, offset=offset
        )

    async def list_flagged(self, limit: int = 50, offset: int = 0) -> list[Comment]:
        """List flagged comments, newest first."""
        return await self.comment_repository.find_flagged(limit=limit, offset=offset)

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count comments per moderation status."""
        return await self.comment_repository.count_by_status()

    async def count_flagged(self) -> int:
        """Count flagged comments."""
        return await self.comment_repository.count_flagged()
