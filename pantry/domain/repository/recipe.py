"""Recipe repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional

from pantry.domain.model.recipe import Recipe
from pantry.domain.value import (
    ModerationStatus,
    RecipeAggregate,
    RecipeFilter,
    RecipeId,
)


class RecipeRepository(ABC):
    """Repository for Recipe aggregate.

    Defines the contract for recipe persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, recipe_id: RecipeId) -> Optional[Recipe]:
        """Find a recipe by ID.

        Args:
            recipe_id: The recipe's unique identifier

        Returns:
            The recipe if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes in a moderation status, oldest first.

        Args:
            status: Moderation status to filter on
            limit: Maximum number of recipes to return
            offset: Number of recipes to skip

        Returns:
            List of recipes
        """
        pass

    @abstractmethod
    async def find_matching(
        self,
        criteria: RecipeFilter,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes matching a filter, newest first.

        Args:
            criteria: Status and text criteria
            limit: Maximum number of recipes to return
            offset: Number of recipes to skip

        Returns:
            List of recipes
        """
        pass

    @abstractmethod
    async def count_matching(self, criteria: RecipeFilter) -> int:
        """Count recipes matching a filter, ignoring pagination."""
        pass

    @abstractmethod
    async def save(self, recipe: Recipe) -> Recipe:
        """Save a recipe (create or update).

        Args:
            recipe: The recipe to save

        Returns:
            The saved recipe
        """
        pass

    @abstractmethod
    async def delete(self, recipe_id: RecipeId) -> bool:
        """Delete a recipe row (hard delete).

        Args:
            recipe_id: The recipe ID to delete

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    def lock(self, recipe_id: RecipeId) -> AbstractAsyncContextManager[None]:
        """Serialize writers of one recipe's derived fields.

        Entering the context blocks until no other writer holds the recipe.
        For a transactional store the lock lasts until the transaction ends.

        Args:
            recipe_id: The recipe to lock
        """
        pass

    @abstractmethod
    async def update_aggregate(
        self, recipe_id: RecipeId, aggregate: RecipeAggregate
    ) -> Optional[Recipe]:
        """Write the derived rating fields of a recipe.

        Args:
            recipe_id: The recipe ID
            aggregate: Freshly computed aggregate

        Returns:
            The updated recipe, or None if it does not exist
        """
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count recipes per moderation status.

        Returns:
            Mapping with an entry for every status
        """
        pass

    @abstractmethod
    async def count_published(self) -> int:
        """Count published recipes."""
        pass
