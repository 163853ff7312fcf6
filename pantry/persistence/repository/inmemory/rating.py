"""In-memory rating repository for testing."""

from typing import Optional

from pantry.domain.model.rating import Rating
from pantry.domain.repository.rating import RatingRepository
from pantry.domain.value import RatingSummary, RecipeId, UserId

from .store import InMemoryStore


class InMemoryRatingRepository(RatingRepository):
    """In-memory implementation of RatingRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_user_and_recipe(
        self, user_id: UserId, recipe_id: RecipeId
    ) -> Optional[Rating]:
        """Find a user's rating of a recipe."""
        for rating in self._store.ratings:
            if rating.user_id == user_id and rating.recipe_id == recipe_id:
                return rating
        return None

    async def upsert(self, rating: Rating) -> Rating:
        """Insert a rating, or replace the value of the existing one."""
        for i, existing in enumerate(self._store.ratings):
            if (
                existing.user_id == rating.user_id
                and existing.recipe_id == rating.recipe_id
            ):
                stored = existing.model_copy(
                    update={"value": rating.value, "updated_at": rating.updated_at}
                )
                self._store.ratings[i] = stored
                return stored

        self._store.ratings.append(rating)
        return rating

    async def summarize_recipe(self, recipe_id: RecipeId) -> RatingSummary:
        """Count and sum the stored ratings of a recipe."""
        values = [r.value for r in self._store.ratings if r.recipe_id == recipe_id]
        return RatingSummary(count=len(values), total=sum(values))

    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every rating of a recipe."""
        before = len(self._store.ratings)
        self._store.ratings = [
            r for r in self._store.ratings if r.recipe_id != recipe_id
        ]
        return before - len(self._store.ratings)

    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count ratings of a recipe."""
        return sum(1 for r in self._store.ratings if r.recipe_id == recipe_id)
