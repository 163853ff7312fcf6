"""In-memory comment repository for testing."""

from datetime import datetime
from typing import List, Optional

from pantry.domain.model.comment import Comment
from pantry.domain.repository.comment import CommentRepository
from pantry.domain.value import CommentId, ModerationStatus, RecipeId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._store.comments.get(comment_id)

    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments in a moderation status, oldest first."""
        matching = sorted(
            (c for c in self._store.comments.values() if c.status == status),
            key=lambda c: c.created_at,
        )
        return matching[offset : offset + limit]

    async def find_flagged(self, limit: int = 50, offset: int = 0) -> List[Comment]:
        """Find flagged comments, newest first."""
        matching = sorted(
            (c for c in self._store.comments.values() if c.is_flagged),
            key=lambda c: c.flagged_at or datetime.min,
            reverse=True,
        )
        return matching[offset : offset + limit]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._store.comments[comment.id] = comment
        return comment

    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every comment on a recipe."""
        doomed = [
            c.id for c in self._store.comments.values() if c.recipe_id == recipe_id
        ]
        for comment_id in doomed:
            del self._store.comments[comment_id]
        return len(doomed)

    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count comments on a recipe."""
        return sum(
            1 for c in self._store.comments.values() if c.recipe_id == recipe_id
        )

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count comments per moderation status."""
        counts = {status: 0 for status in ModerationStatus}
        for comment in self._store.comments.values():
            counts[comment.status] += 1
        return counts

    async def count_flagged(self) -> int:
        """Count flagged comments."""
        return sum(1 for c in self._store.comments.values() if c.is_flagged)
