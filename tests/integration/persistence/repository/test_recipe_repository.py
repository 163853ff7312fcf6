"""Integration tests for PostgresRecipeRepository's filtered listing.

Runs against the database named by DATABASE__URL with the schema migrated.
Writes are never committed.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest

from pantry.domain.repository import RecipeRepository, UserRepository
from pantry.domain.value import ModerationStatus, RecipeFilter
from tests.conftest import make_recipe, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="DATABASE__URL not configured"
)

integration_env = create_env_fixture(unmock={"persistence"})


@pytest.mark.asyncio
async def test_find_matching_filters_and_orders(integration_env):
    user_repo = await integration_env.get(UserRepository)
    recipe_repo = await integration_env.get(RecipeRepository)
    author = await user_repo.save(make_user())
    marker = uuid4().hex[:8]
    older = await recipe_repo.save(
        make_recipe(
            author,
            ModerationStatus.APPROVED,
            title=f"Tart {marker}",
            age=timedelta(hours=1),
        )
    )
    newer = await recipe_repo.save(
        make_recipe(author, ModerationStatus.PENDING, title=f"TART {marker}")
    )

    everything = RecipeFilter(search=f"tart {marker}")
    approved = RecipeFilter(status=ModerationStatus.APPROVED, search=marker)

    assert [r.id for r in await recipe_repo.find_matching(everything)] == [
        newer.id,
        older.id,
    ]
    assert await recipe_repo.count_matching(everything) == 2
    assert [r.id for r in await recipe_repo.find_matching(approved)] == [older.id]


@pytest.mark.asyncio
async def test_wildcards_in_search_are_literal(integration_env):
    user_repo = await integration_env.get(UserRepository)
    recipe_repo = await integration_env.get(RecipeRepository)
    author = await user_repo.save(make_user())
    marker = uuid4().hex[:8]
    await recipe_repo.save(make_recipe(author, title=f"Bread {marker}"))

    assert await recipe_repo.count_matching(RecipeFilter(search=f"%{marker}")) == 0
    assert await recipe_repo.count_matching(RecipeFilter(author=author.username)) == 1
