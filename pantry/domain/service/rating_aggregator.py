"""Rating aggregation domain service."""

from datetime import datetime
from typing import Any
from uuid import uuid4

import logfire

from pantry.domain.error import InvalidArgumentError, NotFoundError
from pantry.domain.model import Rating
from pantry.domain.repository import RatingRepository, RecipeRepository
from pantry.domain.value import RatingId, RecipeAggregate, RecipeId, UserId

from .base import Service

MIN_RATING = 1
MAX_RATING = 5


class RatingAggregator(Service):
    """Domain service maintaining ratings and the recipe aggregate.

    The aggregate is recomputed from the stored rating rows after every
    write, never from a running total, and always while the recipe is
    locked so concurrent raters cannot both write a stale average.
    """

    def __init__(
        self,
        rating_repository: RatingRepository,
        recipe_repository: RecipeRepository,
    ) -> None:
        """Initialize rating aggregator.

        Args:
            rating_repository: Rating repository
            recipe_repository: Recipe repository
        """
        self.rating_repository = rating_repository
        self.recipe_repository = recipe_repository

    @staticmethod
    def validate_value(value: Any) -> int:
        """Validate a rating value.

        Returns:
            The value as an int

        Raises:
            InvalidArgumentError: If value is not an integer in [1, 5]
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(f"Rating must be an integer, got {value!r}")
        if not MIN_RATING <= value <= MAX_RATING:
            raise InvalidArgumentError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        return value

    async def submit(
        self, user_id: UserId, recipe_id: RecipeId, value: Any
    ) -> RecipeAggregate:
        """Store a user's rating and recompute the recipe aggregate.

        A second rating by the same user replaces the first.

        Args:
            user_id: Rating user ID
            recipe_id: Rated recipe ID
            value: Star value, integer in [1, 5]

        Returns:
            The recipe aggregate after the write

        Raises:
            InvalidArgumentError: If value is invalid
            NotFoundError: If the recipe disappeared before the aggregate
                could be written
        """
        value = self.validate_value(value)
        with logfire.span(
            "rating_aggregator.submit",
            user_id=str(user_id),
            recipe_id=str(recipe_id),
            value=value,
        ):
            async with self.recipe_repository.lock(recipe_id):
                existing = await self.rating_repository.find_by_user_and_recipe(
                    user_id, recipe_id
                )
                now = datetime.now()
                rating = Rating(
                    id=existing.id if existing else RatingId(uuid4()),
                    user_id=user_id,
                    recipe_id=recipe_id,
                    value=value,
                    created_at=existing.created_at if existing else now,
                    updated_at=now,
                )
                await self.rating_repository.upsert(rating)

                aggregate = await self.recompute(recipe_id)

            logfire.info(
                "Rating stored",
                user_id=str(user_id),
                recipe_id=str(recipe_id),
                replaced=existing is not None,
                average=str(aggregate.rating),
                count=aggregate.review_count,
            )
            return aggregate

    async def recompute(self, recipe_id: RecipeId) -> RecipeAggregate:
        """Recompute and write a recipe's aggregate from its stored ratings.

        Callers must hold the recipe lock.

        Raises:
            NotFoundError: If the recipe does not exist
        """
        summary = await self.rating_repository.summarize_recipe(recipe_id)
        aggregate = RecipeAggregate.from_summary(summary)
        updated = await self.recipe_repository.update_aggregate(recipe_id, aggregate)
        if updated is None:
            logfire.warn("Aggregate target missing", recipe_id=str(recipe_id))
            raise NotFoundError("Recipe", str(recipe_id))
        return aggregate

    async def delete_for_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every rating of a recipe (deletion cascade only).

        The recipe's aggregate is not recomputed; the recipe is about to go.
        """
        with logfire.span(
            "rating_aggregator.delete_for_recipe", recipe_id=str(recipe_id)
        ):
            deleted = await self.rating_repository.delete_by_recipe(recipe_id)
            logfire.info(
                "Ratings deleted for recipe", recipe_id=str(recipe_id), count=deleted
            )
            return deleted

    async def get(self, user_id: UserId, recipe_id: RecipeId) -> Rating | None:
        """Get a user's rating of a recipe.

        Args:
            user_id: Rating user ID
            recipe_id: Rated recipe ID

        Returns:
            The rating if the user rated the recipe, None otherwise
        """
        return await self.rating_repository.find_by_user_and_recipe(user_id, recipe_id)
