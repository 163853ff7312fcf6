"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from pantry.domain.model.comment import Comment
from pantry.domain.value import CommentId, ModerationStatus, RecipeId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments in a moderation status, oldest first.

        Args:
            status: Moderation status to filter on
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def find_flagged(self, limit: int = 50, offset: int = 0) -> List[Comment]:
        """Find flagged comments, newest first.

        Args:
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of flagged comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every comment on a recipe.

        Only used as part of a recipe deletion cascade.

        Args:
            recipe_id: The recipe ID

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count comments on a recipe.

        Args:
            recipe_id: The recipe ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count comments per moderation status.

        Returns:
            Mapping with an entry for every status
        """
        pass

    @abstractmethod
    async def count_flagged(self) -> int:
        """Count flagged comments."""
        pass
