"""Tests for the ModerationService facade.

These drive whole operations through the facade: unit of work boundaries,
error kinds in the result envelope, and the end-to-end moderation flows.
"""

import asyncio
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from pantry.application.moderation_service import ModerationService
from pantry.domain.repository import (
    AuditRepository,
    CommentRepository,
    RatingRepository,
    RecipeRepository,
    UnitOfWork,
    UserRepository,
)
from pantry.domain.value import (
    AuditAction,
    EntityType,
    ErrorKind,
    ModerationStatus,
    Role,
)
from tests.conftest import make_comment, make_recipe, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

clearing_env = create_env_fixture(env={"MODERATION__CLEAR_FLAG_ON_REVIEW": "true"})

RECIPE_PAYLOAD = {
    "title": "Lemon Risotto",
    "category": "dinner",
    "difficulty": "medium",
    "ingredients": ["arborio rice", "lemon", "parmesan"],
}


async def _user(env, role: Role = Role.USER):
    user_repo = await env.get(UserRepository)
    return await user_repo.save(make_user(role))


async def _recipe(env, status: ModerationStatus = ModerationStatus.APPROVED):
    recipe_repo = await env.get(RecipeRepository)
    author = await _user(env)
    return await recipe_repo.save(make_recipe(author, status=status))


async def _comment(env, status: ModerationStatus = ModerationStatus.APPROVED):
    comment_repo = await env.get(CommentRepository)
    recipe = await _recipe(env)
    author = await _user(env)
    return await comment_repo.save(make_comment(recipe, author, status=status))


class TestRecipeFlow:
    """Submission, review and deletion of recipes through the facade."""

    @pytest.mark.asyncio
    async def test_submit_then_approve_publishes(self, unit_env):
        service = await unit_env.get(ModerationService)
        author = await _user(unit_env)
        moderator = await _user(unit_env, Role.MODERATOR)

        submitted = await service.submit_recipe(author.id, RECIPE_PAYLOAD)
        assert submitted.ok
        assert submitted.value.status == ModerationStatus.PENDING
        assert submitted.value.is_published is False

        approved = await service.moderate(
            "recipe", submitted.value.recipe_id, "approve", moderator.id
        )

        assert approved.ok
        assert approved.value.status == ModerationStatus.APPROVED
        assert approved.value.is_published is True
        assert approved.value.moderated_by == str(moderator.id)

    @pytest.mark.asyncio
    async def test_approve_with_edits(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        moderator = await _user(unit_env, Role.MODERATOR)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)

        result = await service.moderate(
            "recipe",
            recipe.id,
            "approve",
            moderator.id,
            edits={"title": "Lemon Risotto with Peas"},
        )

        assert result.ok
        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.title == "Lemon Risotto with Peas"
        assert stored.is_published is True

    @pytest.mark.asyncio
    async def test_user_cannot_approve(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        audit_repo = await unit_env.get(AuditRepository)
        user = await _user(unit_env)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)

        result = await service.moderate("recipe", recipe.id, "approve", user.id)

        assert not result.ok
        assert result.error.kind == ErrorKind.FORBIDDEN
        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.status == ModerationStatus.PENDING
        assert stored.is_published is False
        assert await audit_repo.find_by_entity(EntityType.RECIPE, recipe.id) == []

    @pytest.mark.asyncio
    async def test_missing_payload_field(self, unit_env):
        service = await unit_env.get(ModerationService)
        author = await _user(unit_env)

        result = await service.submit_recipe(author.id, {"title": "Lemon Risotto"})

        assert not result.ok
        assert result.error.kind == ErrorKind.INVALID_ARGUMENT
        assert "category" in result.error.message

    @pytest.mark.asyncio
    async def test_whitespace_title_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)
        author = await _user(unit_env)

        result = await service.submit_recipe(
            author.id, {**RECIPE_PAYLOAD, "title": "   "}
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT
        assert "title" in result.error.message

    @pytest.mark.asyncio
    async def test_text_fields_are_trimmed(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        author = await _user(unit_env)

        result = await service.submit_recipe(
            author.id, {**RECIPE_PAYLOAD, "title": "  Lemon Risotto \n"}
        )

        stored = await recipe_repo.find_by_id(UUID(result.value.recipe_id))
        assert stored.title == "Lemon Risotto"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, ["Lemon Risotto"], "Lemon Risotto"])
    async def test_payload_must_be_a_mapping(self, unit_env, payload):
        service = await unit_env.get(ModerationService)
        author = await _user(unit_env)

        result = await service.submit_recipe(author.id, payload)

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_payload_cannot_choose_the_author(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        author = await _user(unit_env)
        other = await _user(unit_env)

        result = await service.submit_recipe(
            author.id, {**RECIPE_PAYLOAD, "author_id": str(other.id)}
        )

        assert result.ok
        stored = await recipe_repo.find_by_id(UUID(result.value.recipe_id))
        assert stored.author_id == author.id

    @pytest.mark.asyncio
    async def test_unknown_edit_field_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        moderator = await _user(unit_env, Role.MODERATOR)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)

        result = await service.moderate(
            "recipe", recipe.id, "approve", moderator.id, edits={"servings": 99}
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT
        assert "servings" in result.error.message
        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.status == ModerationStatus.PENDING
        assert stored.servings == recipe.servings

    @pytest.mark.asyncio
    async def test_pending_queue_for_moderators(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        pending = await _recipe(unit_env, ModerationStatus.PENDING)
        await _recipe(unit_env, ModerationStatus.APPROVED)

        result = await service.list_pending_recipes(moderator.id)

        assert result.ok
        assert [r.recipe_id for r in result.value.recipes] == [str(pending.id)]

    @pytest.mark.asyncio
    async def test_list_recipes_filters_and_counts(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        rejected = await _recipe(unit_env, ModerationStatus.REJECTED)
        await _recipe(unit_env, ModerationStatus.APPROVED)

        everything = await service.list_recipes(moderator.id)
        only_rejected = await service.list_recipes(moderator.id, status="rejected")
        unknown = await service.list_recipes(moderator.id, status="archived")

        assert everything.value.total == 2
        assert [r.recipe_id for r in only_rejected.value.recipes] == [
            str(rejected.id)
        ]
        assert unknown.error.kind == ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_delete_cascades_with_one_audit_entry(self, unit_env):
        service = await unit_env.get(ModerationService)
        rating_repo = await unit_env.get(RatingRepository)
        comment_repo = await unit_env.get(CommentRepository)
        audit_repo = await unit_env.get(AuditRepository)
        admin = await _user(unit_env, Role.ADMIN)
        recipe = await _recipe(unit_env)
        for value in (4, 5):
            rater = await _user(unit_env)
            assert (await service.rate(rater.id, recipe.id, value)).ok
        commenter = await _user(unit_env)
        assert (await service.submit_comment(commenter.id, recipe.id, "Tasty")).ok

        result = await service.delete_recipe(recipe.id, admin.id, "Duplicate")

        assert result.ok
        assert result.value.ratings_removed == 2
        assert result.value.comments_removed == 1
        assert await rating_repo.count_by_recipe(recipe.id) == 0
        assert await comment_repo.count_by_recipe(recipe.id) == 0
        entries = await audit_repo.find_by_entity(EntityType.RECIPE, recipe.id)
        assert len(entries) == 1
        assert entries[0].action == AuditAction.DELETE
        assert entries[0].reason == "Duplicate"

    @pytest.mark.asyncio
    async def test_delete_missing_recipe(self, unit_env):
        service = await unit_env.get(ModerationService)
        admin = await _user(unit_env, Role.ADMIN)

        result = await service.delete_recipe(uuid4(), admin.id)

        assert result.error.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_surviving_row_is_conflict_and_keeps_cascade(
        self, unit_env, monkeypatch
    ):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        rating_repo = await unit_env.get(RatingRepository)
        audit_repo = await unit_env.get(AuditRepository)
        unit_of_work = await unit_env.get(UnitOfWork)
        admin = await _user(unit_env, Role.ADMIN)
        recipe = await _recipe(unit_env)
        rater = await _user(unit_env)
        await service.rate(rater.id, recipe.id, 3)
        commits_before = unit_of_work.commits

        async def delete_nothing(recipe_id):
            return False

        monkeypatch.setattr(recipe_repo, "delete", delete_nothing)

        result = await service.delete_recipe(recipe.id, admin.id)

        assert result.error.kind == ErrorKind.CONFLICT
        assert unit_of_work.commits == commits_before + 1
        assert await recipe_repo.find_by_id(recipe.id) is not None
        assert await rating_repo.count_by_recipe(recipe.id) == 0
        assert len(await audit_repo.find_by_entity(EntityType.RECIPE, recipe.id)) == 1


class TestCommentFlow:
    """Comment submission, flagging and review through the facade."""

    @pytest.mark.asyncio
    async def test_blocklisted_comment_waits_in_queue(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        author = await _user(unit_env)
        recipe = await _recipe(unit_env)

        submitted = await service.submit_comment(
            author.id, recipe.id, "What a stupid idea"
        )
        queue = await service.list_comment_queue(moderator.id)

        assert submitted.value.status == ModerationStatus.PENDING
        assert [c.comment_id for c in queue.value.comments] == [
            submitted.value.comment_id
        ]

    @pytest.mark.asyncio
    async def test_whitespace_comment_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        author = await _user(unit_env)
        recipe = await _recipe(unit_env)

        result = await service.submit_comment(author.id, recipe.id, "   \n\t ")

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT
        assert await comment_repo.count_by_recipe(recipe.id) == 0

    @pytest.mark.asyncio
    async def test_comment_stored_trimmed(self, unit_env):
        service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        author = await _user(unit_env)
        recipe = await _recipe(unit_env)

        result = await service.submit_comment(author.id, recipe.id, "  Tasty!\n")

        stored = await comment_repo.find_by_id(UUID(result.value.comment_id))
        assert stored.content == "Tasty!"

    @pytest.mark.asyncio
    async def test_flag_then_reject_keeps_flag(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        comment = await _comment(unit_env)

        flagged = await service.flag_comment(comment.id, moderator.id, "spam")
        rejected = await service.moderate("comment", comment.id, "reject", moderator.id)

        assert flagged.value.is_flagged is True
        assert flagged.value.status == ModerationStatus.APPROVED
        assert rejected.value.status == ModerationStatus.REJECTED
        assert rejected.value.is_flagged is True

    @pytest.mark.asyncio
    async def test_flag_then_reject_clears_flag_when_configured(self, clearing_env):
        service = await clearing_env.get(ModerationService)
        moderator = await _user(clearing_env, Role.MODERATOR)
        comment = await _comment(clearing_env)

        await service.flag_comment(comment.id, moderator.id, "spam")
        rejected = await service.moderate("comment", comment.id, "reject", moderator.id)

        assert rejected.value.status == ModerationStatus.REJECTED
        assert rejected.value.is_flagged is False

    @pytest.mark.asyncio
    async def test_unflag(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        comment = await _comment(unit_env, ModerationStatus.PENDING)

        await service.flag_comment(comment.id, moderator.id)
        result = await service.unflag_comment(comment.id, moderator.id)

        assert result.value.is_flagged is False
        assert result.value.status == ModerationStatus.PENDING

    @pytest.mark.asyncio
    async def test_user_cannot_flag(self, unit_env):
        service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        audit_repo = await unit_env.get(AuditRepository)
        user = await _user(unit_env)
        comment = await _comment(unit_env)

        result = await service.flag_comment(comment.id, user.id, "spam")

        assert result.error.kind == ErrorKind.FORBIDDEN
        assert (await comment_repo.find_by_id(comment.id)).is_flagged is False
        assert await audit_repo.find_by_entity(EntityType.COMMENT, comment.id) == []

    @pytest.mark.asyncio
    async def test_edits_rejected_for_comments(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        comment = await _comment(unit_env, ModerationStatus.PENDING)

        result = await service.moderate(
            "comment", comment.id, "approve", moderator.id, edits={"content": "Nice"}
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)

        result = await service.flag_comment(uuid4(), moderator.id)

        assert result.error.kind == ErrorKind.NOT_FOUND


class TestRatingFlow:
    """Ratings and aggregates through the facade."""

    @pytest.mark.asyncio
    async def test_rerating_replaces_previous_value(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        recipe = await _recipe(unit_env)
        first = await _user(unit_env)
        second = await _user(unit_env)

        await service.rate(first.id, recipe.id, 4)
        after_two = await service.rate(second.id, recipe.id, 2)
        after_rerate = await service.rate(first.id, recipe.id, 5)

        assert after_two.value.average == Decimal("3.00")
        assert after_rerate.value.average == Decimal("3.50")
        assert after_rerate.value.count == 2
        stored = await recipe_repo.find_by_id(recipe.id)
        assert stored.rating == Decimal("3.50")
        assert stored.review_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 6, "4", 3.5])
    async def test_invalid_values(self, unit_env, value):
        service = await unit_env.get(ModerationService)
        rating_repo = await unit_env.get(RatingRepository)
        recipe = await _recipe(unit_env)
        rater = await _user(unit_env)

        result = await service.rate(rater.id, recipe.id, value)

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT
        assert await rating_repo.count_by_recipe(recipe.id) == 0

    @pytest.mark.asyncio
    async def test_unpublished_recipe_not_found(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)
        rater = await _user(unit_env)

        result = await service.rate(rater.id, recipe.id, 4)

        assert result.error.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_rating(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe = await _recipe(unit_env)
        rater = await _user(unit_env)
        await service.rate(rater.id, recipe.id, 2)

        result = await service.get_rating(rater.id, recipe.id)

        assert result.value.value == 2


class TestAdministration:
    """Account management and dashboard counts."""

    @pytest.mark.asyncio
    async def test_block_user(self, unit_env):
        service = await unit_env.get(ModerationService)
        admin = await _user(unit_env, Role.ADMIN)
        target = await _user(unit_env)

        result = await service.manage_user(admin.id, target.id, "block", "Spam")
        blocked = await service.submit_recipe(target.id, RECIPE_PAYLOAD)

        assert result.value.status == "blocked"
        assert blocked.error.kind == ErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_flag_user(self, unit_env):
        service = await unit_env.get(ModerationService)
        audit_repo = await unit_env.get(AuditRepository)
        moderator = await _user(unit_env, Role.MODERATOR)
        target = await _user(unit_env)

        result = await service.flag_user(moderator.id, target.id)

        assert result.ok
        assert result.value.is_flagged is True
        assert result.value.flag_reason == "Flagged by moderator"
        entries = await audit_repo.find_by_entity(EntityType.USER, target.id)
        assert [e.action for e in entries] == [AuditAction.FLAG]

    @pytest.mark.asyncio
    async def test_user_cannot_flag_user(self, unit_env):
        service = await unit_env.get(ModerationService)
        user_repo = await unit_env.get(UserRepository)
        actor = await _user(unit_env)
        target = await _user(unit_env)

        result = await service.flag_user(actor.id, target.id, "Rude")

        assert result.error.kind == ErrorKind.FORBIDDEN
        assert (await user_repo.find_by_id(target.id)).is_flagged is False

    @pytest.mark.asyncio
    async def test_stats(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        await _recipe(unit_env, ModerationStatus.PENDING)
        await _comment(unit_env, ModerationStatus.PENDING)

        result = await service.get_moderation_stats(moderator.id)

        assert result.value.recipes_by_status[ModerationStatus.PENDING] == 1
        assert result.value.published_recipes == 1
        assert result.value.pending_comments == 1


class TestFailureEnvelope:
    """Every failure comes back as a result, never as a raised exception."""

    @pytest.mark.asyncio
    async def test_anonymous_actor(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)

        result = await service.moderate("recipe", recipe.id, "approve", None)

        assert result.error.kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_unknown_actor(self, unit_env):
        service = await unit_env.get(ModerationService)

        result = await service.submit_recipe(uuid4(), RECIPE_PAYLOAD)

        assert result.error.kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entity_type,action",
        [("user", "approve"), ("recipe", "unflag"), ("recipe", "publish")],
    )
    async def test_bad_tokens(self, unit_env, entity_type, action):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)

        result = await service.moderate(entity_type, recipe.id, action, moderator.id)

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_malformed_id(self, unit_env):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)

        result = await service.moderate("recipe", "not-a-uuid", "approve", moderator.id)

        assert result.error.kind == ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_timeout_rolls_back(self, unit_env, monkeypatch):
        service = await unit_env.get(ModerationService)
        rating_repo = await unit_env.get(RatingRepository)
        recipe = await _recipe(unit_env)
        rater = await _user(unit_env)
        aggregator = service.rate_recipe_use_case.rating_aggregator

        async def slow_execute(request):
            await aggregator.submit(rater.id, recipe.id, 4)
            await asyncio.sleep(1)

        monkeypatch.setattr(service.settings, "operation_timeout_seconds", 0.01)
        monkeypatch.setattr(service.rate_recipe_use_case, "execute", slow_execute)

        result = await service.rate(rater.id, recipe.id, 4)

        assert result.error.kind == ErrorKind.UNAVAILABLE
        assert result.error.message == "Operation timed out"
        assert await rating_repo.count_by_recipe(recipe.id) == 0

    @pytest.mark.asyncio
    async def test_storage_failure_is_unavailable(self, unit_env, monkeypatch):
        service = await unit_env.get(ModerationService)
        rating_repo = await unit_env.get(RatingRepository)
        recipe = await _recipe(unit_env)
        rater = await _user(unit_env)

        async def broken_summary(recipe_id):
            raise ConnectionError("connection reset")

        monkeypatch.setattr(rating_repo, "summarize_recipe", broken_summary)

        result = await service.rate(rater.id, recipe.id, 4)

        assert result.error.kind == ErrorKind.UNAVAILABLE
        assert result.error.message == "Storage is unavailable"
        assert await rating_repo.count_by_recipe(recipe.id) == 0

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self, unit_env, monkeypatch):
        service = await unit_env.get(ModerationService)
        moderator = await _user(unit_env, Role.MODERATOR)

        async def broken_execute(request):
            raise RuntimeError("boom")

        monkeypatch.setattr(
            service.get_moderation_stats_use_case, "execute", broken_execute
        )

        result = await service.get_moderation_stats(moderator.id)

        assert result.error.kind == ErrorKind.INTERNAL
        assert "boom" not in result.error.message

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_fail_operation(self, unit_env):
        service = await unit_env.get(ModerationService)
        recipe_repo = await unit_env.get(RecipeRepository)
        audit_repo = await unit_env.get(AuditRepository)
        moderator = await _user(unit_env, Role.MODERATOR)
        recipe = await _recipe(unit_env, ModerationStatus.PENDING)
        audit_repo.fail_appends = True

        result = await service.moderate("recipe", recipe.id, "reject", moderator.id)

        assert result.ok
        assert result.value.audit_recorded is False
        assert (await recipe_repo.find_by_id(recipe.id)).status == (
            ModerationStatus.REJECTED
        )
