"""Unit tests for RatingAggregator."""

import asyncio
from decimal import Decimal
from uuid import uuid4

import pytest

from pantry.domain.error import InvalidArgumentError, NotFoundError
from pantry.domain.repository import RatingRepository, RecipeRepository
from pantry.domain.service import RatingAggregator
from pantry.domain.value import ModerationStatus, RecipeId, Role, UserId
from tests.conftest import make_recipe, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _published_recipe(unit_env):
    recipe_repo = await unit_env.get(RecipeRepository)
    recipe = make_recipe(make_user(Role.USER), status=ModerationStatus.APPROVED)
    await recipe_repo.save(recipe)
    return recipe


class TestValidateValue:
    """Star values must be integers in [1, 5]."""

    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_accepts_range(self, value):
        assert RatingAggregator.validate_value(value) == value

    @pytest.mark.parametrize("value", [0, 6, -1, 2.5, "4", None, True])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidArgumentError):
            RatingAggregator.validate_value(value)


class TestSubmit:
    """Tests for submit."""

    @pytest.mark.asyncio
    async def test_scenario_re_rating_replaces_value(self, unit_env):
        """A rates 4, B rates 2, then A re-rates 5."""
        aggregator = await unit_env.get(RatingAggregator)
        recipe_repo = await unit_env.get(RecipeRepository)
        recipe = await _published_recipe(unit_env)
        user_a, user_b = UserId(uuid4()), UserId(uuid4())

        first = await aggregator.submit(user_a, recipe.id, 4)
        assert first.rating == Decimal("4.00")
        assert first.review_count == 1

        second = await aggregator.submit(user_b, recipe.id, 2)
        assert second.rating == Decimal("3.00")
        assert second.review_count == 2

        third = await aggregator.submit(user_a, recipe.id, 5)
        assert third.rating == Decimal("3.50")
        assert third.review_count == 2

        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.rating == Decimal("3.50")
        assert stored.review_count == 2

    @pytest.mark.asyncio
    async def test_same_value_twice_is_idempotent(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        rating_repo = await unit_env.get(RatingRepository)
        recipe = await _published_recipe(unit_env)
        user = UserId(uuid4())

        first = await aggregator.submit(user, recipe.id, 3)
        second = await aggregator.submit(user, recipe.id, 3)

        assert first == second
        assert await rating_repo.count_by_recipe(recipe.id) == 1

    @pytest.mark.asyncio
    async def test_re_rating_keeps_row_identity(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        recipe = await _published_recipe(unit_env)
        user = UserId(uuid4())

        await aggregator.submit(user, recipe.id, 1)
        original = await aggregator.get(user, recipe.id)
        await aggregator.submit(user, recipe.id, 4)
        replaced = await aggregator.get(user, recipe.id)

        assert replaced.id == original.id
        assert replaced.created_at == original.created_at
        assert replaced.value == 4
        assert replaced.updated_at >= original.updated_at

    @pytest.mark.asyncio
    async def test_average_is_recomputed_from_all_rows(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        recipe = await _published_recipe(unit_env)

        for value in (5, 4, 4):
            aggregate = await aggregator.submit(UserId(uuid4()), recipe.id, value)

        assert aggregate.rating == Decimal("4.33")
        assert aggregate.review_count == 3

    @pytest.mark.asyncio
    async def test_invalid_value_writes_nothing(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        rating_repo = await unit_env.get(RatingRepository)
        recipe = await _published_recipe(unit_env)

        with pytest.raises(InvalidArgumentError):
            await aggregator.submit(UserId(uuid4()), recipe.id, 7)

        assert await rating_repo.count_by_recipe(recipe.id) == 0

    @pytest.mark.asyncio
    async def test_missing_recipe_raises_not_found(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        with pytest.raises(NotFoundError):
            await aggregator.submit(UserId(uuid4()), RecipeId(uuid4()), 3)

    @pytest.mark.asyncio
    async def test_concurrent_raters_all_counted(self, unit_env):
        """Concurrent submissions serialize around the recompute."""
        aggregator = await unit_env.get(RatingAggregator)
        recipe_repo = await unit_env.get(RecipeRepository)
        recipe = await _published_recipe(unit_env)
        values = [1, 2, 3, 4, 5, 5, 4, 3]

        await asyncio.gather(
            *(aggregator.submit(UserId(uuid4()), recipe.id, v) for v in values)
        )

        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.review_count == len(values)
        assert stored.rating == Decimal("3.38")

    @pytest.mark.asyncio
    async def test_recipes_are_independent(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        first = await _published_recipe(unit_env)
        second = await _published_recipe(unit_env)
        user = UserId(uuid4())

        await aggregator.submit(user, first.id, 5)
        aggregate = await aggregator.submit(user, second.id, 1)

        assert aggregate.rating == Decimal("1.00")
        assert aggregate.review_count == 1


class TestGetAndDelete:
    """Tests for get and delete_for_recipe."""

    @pytest.mark.asyncio
    async def test_get_without_rating_returns_none(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        recipe = await _published_recipe(unit_env)
        assert await aggregator.get(UserId(uuid4()), recipe.id) is None

    @pytest.mark.asyncio
    async def test_delete_for_recipe_only_touches_that_recipe(self, unit_env):
        aggregator = await unit_env.get(RatingAggregator)
        rating_repo = await unit_env.get(RatingRepository)
        doomed = await _published_recipe(unit_env)
        kept = await _published_recipe(unit_env)
        for _ in range(3):
            await aggregator.submit(UserId(uuid4()), doomed.id, 4)
        await aggregator.submit(UserId(uuid4()), kept.id, 2)

        assert await aggregator.delete_for_recipe(doomed.id) == 3

        assert await rating_repo.count_by_recipe(doomed.id) == 0
        assert await rating_repo.count_by_recipe(kept.id) == 1
