"""In-memory recipe repository for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from pantry.domain.model.recipe import Recipe
from pantry.domain.repository.recipe import RecipeRepository
from pantry.domain.value import (
    ModerationStatus,
    RecipeAggregate,
    RecipeFilter,
    RecipeId,
)

from .store import InMemoryStore


class InMemoryRecipeRepository(RecipeRepository):
    """In-memory implementation of RecipeRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, recipe_id: RecipeId) -> Optional[Recipe]:
        """Find a recipe by ID."""
        return self._store.recipes.get(recipe_id)

    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes in a moderation status, oldest first."""
        matching = sorted(
            (r for r in self._store.recipes.values() if r.status == status),
            key=lambda r: r.created_at,
        )
        return matching[offset : offset + limit]

    def _matching(self, criteria: RecipeFilter) -> List[Recipe]:
        return [
            r
            for r in self._store.recipes.values()
            if (criteria.status is None or r.status == criteria.status)
            and criteria.matches(r.title, r.description, r.author_username)
        ]

    async def find_matching(
        self,
        criteria: RecipeFilter,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes matching a filter, newest first."""
        matching = sorted(
            self._matching(criteria), key=lambda r: r.created_at, reverse=True
        )
        return matching[offset : offset + limit]

    async def count_matching(self, criteria: RecipeFilter) -> int:
        """Count recipes matching a filter."""
        return len(self._matching(criteria))

    async def save(self, recipe: Recipe) -> Recipe:
        """Save a recipe, keeping the stored derived rating fields."""
        existing = self._store.recipes.get(recipe.id)
        if existing:
            recipe = recipe.model_copy(
                update={
                    "rating": existing.rating,
                    "review_count": existing.review_count,
                }
            )
        self._store.recipes[recipe.id] = recipe
        return recipe

    async def delete(self, recipe_id: RecipeId) -> bool:
        """Delete a recipe."""
        return self._store.recipes.pop(recipe_id, None) is not None

    @asynccontextmanager
    async def lock(self, recipe_id: RecipeId) -> AsyncIterator[None]:
        """Hold the recipe's lock for the duration of the block."""
        async with self._store.lock_for(recipe_id):
            yield

    async def update_aggregate(
        self, recipe_id: RecipeId, aggregate: RecipeAggregate
    ) -> Optional[Recipe]:
        """Write the derived rating fields of a recipe."""
        recipe = self._store.recipes.get(recipe_id)
        if recipe is None:
            return None
        updated = recipe.model_copy(
            update={"rating": aggregate.rating, "review_count": aggregate.review_count}
        )
        self._store.recipes[recipe_id] = updated
        return updated

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count recipes per moderation status."""
        counts = {status: 0 for status in ModerationStatus}
        for recipe in self._store.recipes.values():
            counts[recipe.status] += 1
        return counts

    async def count_published(self) -> int:
        """Count published recipes."""
        return sum(1 for r in self._store.recipes.values() if r.is_published)
