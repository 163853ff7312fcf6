"""Unit tests for ModerateRecipeUseCase."""

from uuid import uuid4

import pytest

from pantry.application.usecase.recipe import (
    ModerateRecipeRequest,
    ModerateRecipeUseCase,
)
from pantry.domain.error import ForbiddenError, InvalidArgumentError, NotFoundError
from pantry.domain.model import RecipeEdits
from pantry.domain.repository import AuditRepository, RecipeRepository, UserRepository
from pantry.domain.value import AuditAction, EntityType, ModerationStatus, Role
from tests.conftest import make_recipe, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(unit_env, actor_role: Role = Role.MODERATOR):
    user_repo = await unit_env.get(UserRepository)
    recipe_repo = await unit_env.get(RecipeRepository)
    actor = await user_repo.save(make_user(actor_role))
    author = await user_repo.save(make_user(Role.USER))
    recipe = await recipe_repo.save(make_recipe(author))
    return actor, recipe


class TestModerateRecipeUseCase:
    """Tests for ModerateRecipeUseCase."""

    @pytest.mark.asyncio
    async def test_approve_publishes_and_audits(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ModerateRecipeUseCase)
        recipe_repo = await unit_env.get(RecipeRepository)
        audit_repo = await unit_env.get(AuditRepository)
        moderator, recipe = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            ModerateRecipeRequest(
                recipe_id=recipe.id,
                action="approve",
                actor_id=moderator.id,
                reason="Tested it",
            )
        )

        # Assert
        assert response.status == ModerationStatus.APPROVED
        assert response.is_published is True
        assert response.moderated_by == str(moderator.id)
        assert response.audit_recorded is True

        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.is_published is True

        entries = await audit_repo.find_by_entity(EntityType.RECIPE, recipe.id)
        assert len(entries) == 1
        assert entries[0].action == AuditAction.APPROVE
        assert entries[0].reason == "Tested it"
        # Snapshot is the state before the action
        assert entries[0].snapshot["status"] == "pending"
        assert entries[0].snapshot["is_published"] is False

    @pytest.mark.asyncio
    async def test_approve_with_edits(self, unit_env):
        use_case = await unit_env.get(ModerateRecipeUseCase)
        recipe_repo = await unit_env.get(RecipeRepository)
        moderator, recipe = await _seed(unit_env)

        await use_case.execute(
            ModerateRecipeRequest(
                recipe_id=recipe.id,
                action="approve",
                actor_id=moderator.id,
                edits=RecipeEdits(instructions=["Simmer", "Serve"]),
            )
        )

        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.instructions == ["Simmer", "Serve"]
        assert stored.title == recipe.title

    @pytest.mark.asyncio
    async def test_reject_keeps_unpublished(self, unit_env):
        use_case = await unit_env.get(ModerateRecipeUseCase)
        moderator, recipe = await _seed(unit_env, Role.ADMIN)

        response = await use_case.execute(
            ModerateRecipeRequest(
                recipe_id=recipe.id, action="reject", actor_id=moderator.id
            )
        )

        assert response.status == ModerationStatus.REJECTED
        assert response.is_published is False

    @pytest.mark.asyncio
    async def test_unknown_action_rejected_before_lookup(self, unit_env):
        """A bad token fails even for an anonymous actor and missing recipe."""
        use_case = await unit_env.get(ModerateRecipeUseCase)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                ModerateRecipeRequest(recipe_id=uuid4(), action="publish")
            )

    @pytest.mark.asyncio
    async def test_user_is_forbidden_and_nothing_changes(self, unit_env):
        use_case = await unit_env.get(ModerateRecipeUseCase)
        recipe_repo = await unit_env.get(RecipeRepository)
        audit_repo = await unit_env.get(AuditRepository)
        user, recipe = await _seed(unit_env, Role.USER)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ModerateRecipeRequest(
                    recipe_id=recipe.id, action="approve", actor_id=user.id
                )
            )

        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.status == ModerationStatus.PENDING
        assert await audit_repo.find_by_entity(EntityType.RECIPE, recipe.id) == []

    @pytest.mark.asyncio
    async def test_missing_recipe(self, unit_env):
        use_case = await unit_env.get(ModerateRecipeUseCase)
        moderator, _ = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ModerateRecipeRequest(
                    recipe_id=uuid4(), action="approve", actor_id=moderator.id
                )
            )
