"""Unit tests for flag, unflag and comment review use cases."""

import pytest

from pantry.application.usecase.comment import (
    FlagCommentRequest,
    FlagCommentUseCase,
    ListCommentQueueRequest,
    ListCommentQueueUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
    UnflagCommentUseCase,
)
from pantry.domain.error import ForbiddenError, InvalidArgumentError
from pantry.domain.repository import (
    AuditRepository,
    CommentRepository,
    RecipeRepository,
    UserRepository,
)
from pantry.domain.value import AuditAction, EntityType, ModerationStatus, Role
from tests.conftest import make_comment, make_recipe, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(unit_env, status: ModerationStatus = ModerationStatus.APPROVED):
    user_repo = await unit_env.get(UserRepository)
    recipe_repo = await unit_env.get(RecipeRepository)
    comment_repo = await unit_env.get(CommentRepository)
    moderator = await user_repo.save(make_user(Role.MODERATOR))
    author = await user_repo.save(make_user(Role.USER))
    recipe = await recipe_repo.save(
        make_recipe(author, status=ModerationStatus.APPROVED)
    )
    comment = await comment_repo.save(make_comment(recipe, author, status=status))
    return moderator, author, comment


class TestFlagCommentUseCase:
    """Tests for FlagCommentUseCase and UnflagCommentUseCase."""

    @pytest.mark.asyncio
    async def test_flag_keeps_status_and_audits(self, unit_env):
        use_case = await unit_env.get(FlagCommentUseCase)
        audit_repo = await unit_env.get(AuditRepository)
        moderator, _, comment = await _seed(unit_env, ModerationStatus.PENDING)

        response = await use_case.execute(
            FlagCommentRequest(comment_id=comment.id, actor_id=moderator.id, reason="spam")
        )

        assert response.is_flagged is True
        assert response.flag_reason == "spam"
        assert response.status == ModerationStatus.PENDING
        entries = await audit_repo.find_by_entity(EntityType.COMMENT, comment.id)
        assert [e.action for e in entries] == [AuditAction.FLAG]

    @pytest.mark.asyncio
    async def test_flag_without_reason_uses_default(self, unit_env):
        use_case = await unit_env.get(FlagCommentUseCase)
        moderator, _, comment = await _seed(unit_env)

        response = await use_case.execute(
            FlagCommentRequest(comment_id=comment.id, actor_id=moderator.id)
        )

        assert response.flag_reason == "Flagged by moderator"

    @pytest.mark.asyncio
    async def test_user_cannot_flag(self, unit_env):
        use_case = await unit_env.get(FlagCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        _, author, comment = await _seed(unit_env)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                FlagCommentRequest(comment_id=comment.id, actor_id=author.id)
            )

        assert (await comment_repo.find_by_id(comment.id)).is_flagged is False

    @pytest.mark.asyncio
    async def test_unflag_clears_flag_only(self, unit_env):
        flag = await unit_env.get(FlagCommentUseCase)
        unflag = await unit_env.get(UnflagCommentUseCase)
        moderator, _, comment = await _seed(unit_env, ModerationStatus.REJECTED)
        await flag.execute(
            FlagCommentRequest(comment_id=comment.id, actor_id=moderator.id)
        )

        response = await unflag.execute(
            FlagCommentRequest(comment_id=comment.id, actor_id=moderator.id)
        )

        assert response.is_flagged is False
        assert response.flag_reason is None
        assert response.status == ModerationStatus.REJECTED


class TestModerateCommentUseCase:
    """Tests for ModerateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_approve_pending_comment(self, unit_env):
        use_case = await unit_env.get(ModerateCommentUseCase)
        audit_repo = await unit_env.get(AuditRepository)
        moderator, _, comment = await _seed(unit_env, ModerationStatus.PENDING)

        response = await use_case.execute(
            ModerateCommentRequest(
                comment_id=comment.id, action="approve", actor_id=moderator.id
            )
        )

        assert response.status == ModerationStatus.APPROVED
        entries = await audit_repo.find_by_entity(EntityType.COMMENT, comment.id)
        assert entries[0].snapshot["status"] == "pending"

    @pytest.mark.asyncio
    async def test_unflag_action(self, unit_env):
        flag = await unit_env.get(FlagCommentUseCase)
        use_case = await unit_env.get(ModerateCommentUseCase)
        moderator, _, comment = await _seed(unit_env)
        await flag.execute(
            FlagCommentRequest(comment_id=comment.id, actor_id=moderator.id)
        )

        response = await use_case.execute(
            ModerateCommentRequest(
                comment_id=comment.id, action="unflag", actor_id=moderator.id
            )
        )

        assert response.is_flagged is False
        assert response.status == ModerationStatus.APPROVED

    @pytest.mark.asyncio
    async def test_unknown_action(self, unit_env):
        use_case = await unit_env.get(ModerateCommentUseCase)
        moderator, _, comment = await _seed(unit_env)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                ModerateCommentRequest(
                    comment_id=comment.id, action="delete", actor_id=moderator.id
                )
            )


class TestListCommentQueueUseCase:
    """Tests for ListCommentQueueUseCase."""

    @pytest.mark.asyncio
    async def test_pending_and_flagged_queues(self, unit_env):
        flag = await unit_env.get(FlagCommentUseCase)
        use_case = await unit_env.get(ListCommentQueueUseCase)
        moderator, _, pending = await _seed(unit_env, ModerationStatus.PENDING)
        _, _, approved = await _seed(unit_env)
        await flag.execute(
            FlagCommentRequest(comment_id=approved.id, actor_id=moderator.id)
        )

        pending_queue = await use_case.execute(
            ListCommentQueueRequest(actor_id=moderator.id)
        )
        flagged_queue = await use_case.execute(
            ListCommentQueueRequest(actor_id=moderator.id, flagged_only=True)
        )

        assert [c.comment_id for c in pending_queue.comments] == [str(pending.id)]
        assert [c.comment_id for c in flagged_queue.comments] == [str(approved.id)]

    @pytest.mark.asyncio
    async def test_user_cannot_list(self, unit_env):
        use_case = await unit_env.get(ListCommentQueueUseCase)
        _, author, _ = await _seed(unit_env)

        with pytest.raises(ForbiddenError):
            await use_case.execute(ListCommentQueueRequest(actor_id=author.id))
