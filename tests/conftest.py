"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire
import pytest

from pantry.domain.model import Comment, Recipe, User
from pantry.domain.value import (
    CommentId,
    ModerationState,
    ModerationStatus,
    RecipeId,
    Role,
    UserId,
)


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Keep logfire local and silent while tests run."""
    logfire.configure(send_to_logfire=False, console=False)


def make_user(
    role: Role = Role.USER, username: str | None = None, **overrides
) -> User:
    """Build a user with a unique ID and username."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        username=username or f"{role.value}-{str(user_id)[:8]}",
        role=role,
        **overrides,
    )


def make_recipe(
    author: User,
    status: ModerationStatus = ModerationStatus.PENDING,
    title: str = "Lemon Risotto",
    age: timedelta = timedelta(0),
    **overrides,
) -> Recipe:
    """Build a recipe whose publication flag matches its status.

    ``age`` backdates ``created_at`` for ordering tests.
    """
    state = ModerationState.for_status(status)
    created_at = datetime.now() - age
    return Recipe(
        id=RecipeId(uuid4()),
        author_id=author.id,
        author_username=author.username,
        title=title,
        description="Creamy and bright",
        category="main",
        difficulty="medium",
        prep_time_minutes=10,
        cook_time_minutes=30,
        servings=4,
        ingredients=["arborio rice", "lemon", "parmesan"],
        instructions=["Toast the rice", "Add stock slowly", "Finish with lemon"],
        tags=["italian"],
        status=state.status,
        is_published=state.is_published,
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )


def make_comment(
    recipe: Recipe,
    author: User,
    content: str = "Lovely dish, would cook again",
    status: ModerationStatus = ModerationStatus.APPROVED,
    age: timedelta = timedelta(0),
    **overrides,
) -> Comment:
    """Build a comment on a recipe."""
    created_at = datetime.now() - age
    return Comment(
        id=CommentId(uuid4()),
        recipe_id=recipe.id,
        author_id=author.id,
        author_username=author.username,
        content=content,
        status=status,
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )
