"""Rating repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pantry.domain.model.rating import Rating
from pantry.domain.value import RatingSummary, RecipeId, UserId


class RatingRepository(ABC):
    """Repository for Rating entity.

    Ratings are unique per (user, recipe).
    """

    @abstractmethod
    async def find_by_user_and_recipe(
        self, user_id: UserId, recipe_id: RecipeId
    ) -> Optional[Rating]:
        """Find a user's rating of a recipe.

        Args:
            user_id: The rating user's ID
            recipe_id: The rated recipe's ID

        Returns:
            The rating if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, rating: Rating) -> Rating:
        """Insert a rating, or replace the value of the existing one.

        When a rating for the same (user, recipe) exists, its value and
        ``updated_at`` are replaced and its ID and ``created_at`` are kept.

        Args:
            rating: The rating to store

        Returns:
            The stored rating
        """
        pass

    @abstractmethod
    async def summarize_recipe(self, recipe_id: RecipeId) -> RatingSummary:
        """Count and sum the stored ratings of a recipe.

        Args:
            recipe_id: The recipe ID

        Returns:
            Summary read from the stored rows
        """
        pass

    @abstractmethod
    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every rating of a recipe.

        Only used as part of a recipe deletion cascade.

        Args:
            recipe_id: The recipe ID

        Returns:
            Number of ratings deleted
        """
        pass

    @abstractmethod
    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count ratings of a recipe."""
        pass
