"""Moderation facade.

The single entry point callers use to submit, moderate, rate and delete
content. Every operation runs in one unit of work with a bounded execution
time and returns a ``Result``; no exception escapes.
"""

import asyncio
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar
from uuid import UUID

import logfire
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from pantry.application.result import Result
from pantry.application.usecase.admin import (
    FlagUserRequest,
    FlagUserResponse,
    FlagUserUseCase,
    GetModerationStatsRequest,
    GetModerationStatsResponse,
    GetModerationStatsUseCase,
    ManageUserRequest,
    ManageUserResponse,
    ManageUserUseCase,
)
from pantry.application.usecase.comment import (
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    ListCommentQueueRequest,
    ListCommentQueueResponse,
    ListCommentQueueUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
    UnflagCommentUseCase,
)
from pantry.application.usecase.rating import (
    GetUserRatingRequest,
    GetUserRatingResponse,
    GetUserRatingUseCase,
    RateRecipeRequest,
    RateRecipeResponse,
    RateRecipeUseCase,
)
from pantry.application.usecase.recipe import (
    DeleteRecipeRequest,
    DeleteRecipeResponse,
    DeleteRecipeUseCase,
    ListPendingRecipesRequest,
    ListPendingRecipesResponse,
    ListPendingRecipesUseCase,
    ListRecipesRequest,
    ListRecipesResponse,
    ListRecipesUseCase,
    ModerateRecipeRequest,
    ModerateRecipeResponse,
    ModerateRecipeUseCase,
    SubmitRecipeRequest,
    SubmitRecipeResponse,
    SubmitRecipeUseCase,
)
from pantry.config import ModerationSettings
from pantry.domain.error import DomainError, InvalidArgumentError
from pantry.domain.repository import UnitOfWork
from pantry.domain.service import ModerationStateMachine
from pantry.domain.value import EntityType, ErrorKind

T = TypeVar("T")

ActorId = Optional[UUID | str]


def _validation_message(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)


class ModerationService:
    """Orchestrates content filtering, moderation, rating and auditing."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        settings: ModerationSettings,
        submit_recipe_use_case: SubmitRecipeUseCase,
        moderate_recipe_use_case: ModerateRecipeUseCase,
        delete_recipe_use_case: DeleteRecipeUseCase,
        list_pending_recipes_use_case: ListPendingRecipesUseCase,
        list_recipes_use_case: ListRecipesUseCase,
        submit_comment_use_case: SubmitCommentUseCase,
        moderate_comment_use_case: ModerateCommentUseCase,
        flag_comment_use_case: FlagCommentUseCase,
        unflag_comment_use_case: UnflagCommentUseCase,
        list_comment_queue_use_case: ListCommentQueueUseCase,
        rate_recipe_use_case: RateRecipeUseCase,
        get_user_rating_use_case: GetUserRatingUseCase,
        manage_user_use_case: ManageUserUseCase,
        flag_user_use_case: FlagUserUseCase,
        get_moderation_stats_use_case: GetModerationStatsUseCase,
    ) -> None:
        self.unit_of_work = unit_of_work
        self.settings = settings
        self.submit_recipe_use_case = submit_recipe_use_case
        self.moderate_recipe_use_case = moderate_recipe_use_case
        self.delete_recipe_use_case = delete_recipe_use_case
        self.list_pending_recipes_use_case = list_pending_recipes_use_case
        self.list_recipes_use_case = list_recipes_use_case
        self.submit_comment_use_case = submit_comment_use_case
        self.moderate_comment_use_case = moderate_comment_use_case
        self.flag_comment_use_case = flag_comment_use_case
        self.unflag_comment_use_case = unflag_comment_use_case
        self.list_comment_queue_use_case = list_comment_queue_use_case
        self.rate_recipe_use_case = rate_recipe_use_case
        self.get_user_rating_use_case = get_user_rating_use_case
        self.manage_user_use_case = manage_user_use_case
        self.flag_user_use_case = flag_user_use_case
        self.get_moderation_stats_use_case = get_moderation_stats_use_case

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    async def submit_recipe(
        self, author_id: ActorId, payload: Mapping[str, Any]
    ) -> Result[SubmitRecipeResponse]:
        """Submit a recipe; it starts pending and unpublished.

        The author always comes from ``author_id``; an ``author_id`` key in
        the payload is ignored.
        """

        async def work() -> SubmitRecipeResponse:
            if not isinstance(payload, Mapping):
                raise InvalidArgumentError("Recipe payload must be a mapping")
            return await self.submit_recipe_use_case.execute(
                SubmitRecipeRequest.model_validate({**payload, "author_id": author_id})
            )

        return await self._execute("submit_recipe", work)

    async def moderate(
        self,
        entity_type: str,
        entity_id: UUID | str,
        action: str,
        actor_id: ActorId,
        reason: Optional[str] = None,
        edits: Optional[Mapping[str, Any]] = None,
    ) -> Result[ModerateRecipeResponse | ModerateCommentResponse]:
        """Approve or reject a recipe, or approve, reject or unflag a comment.

        ``edits`` are only accepted for recipes and only applied on approve.
        """

        async def work() -> ModerateRecipeResponse | ModerateCommentResponse:
            kind = ModerationStateMachine.parse_entity_type(entity_type)
            if kind == EntityType.RECIPE:
                return await self.moderate_recipe_use_case.execute(
                    ModerateRecipeRequest(
                        recipe_id=entity_id,
                        action=action,
                        actor_id=actor_id,
                        reason=reason,
                        edits=edits,
                    )
                )
            if edits is not None:
                raise InvalidArgumentError("Edits can only be applied to recipes")
            return await self.moderate_comment_use_case.execute(
                ModerateCommentRequest(
                    comment_id=entity_id,
                    action=action,
                    actor_id=actor_id,
                    reason=reason,
                )
            )

        return await self._execute("moderate", work)

    async def delete_recipe(
        self,
        recipe_id: UUID | str,
        actor_id: ActorId,
        reason: Optional[str] = None,
    ) -> Result[DeleteRecipeResponse]:
        """Delete a recipe with its ratings and comments."""
        return await self._execute(
            "delete_recipe",
            lambda: self.delete_recipe_use_case.execute(
                DeleteRecipeRequest(recipe_id=recipe_id, actor_id=actor_id, reason=reason)
            ),
        )

    async def list_pending_recipes(
        self, actor_id: ActorId, limit: int = 50, offset: int = 0
    ) -> Result[ListPendingRecipesResponse]:
        """List recipes awaiting review, oldest first."""
        return await self._execute(
            "list_pending_recipes",
            lambda: self.list_pending_recipes_use_case.execute(
                ListPendingRecipesRequest(actor_id=actor_id, limit=limit, offset=offset)
            ),
        )

    async def list_recipes(
        self,
        actor_id: ActorId,
        status: str = "all",
        search: Optional[str] = None,
        author: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListRecipesResponse]:
        """Browse recipes in any status, newest first, with the total count.

        ``search`` matches title or description and ``author`` matches the
        author's username.
        """
        return await self._execute(
            "list_recipes",
            lambda: self.list_recipes_use_case.execute(
                ListRecipesRequest(
                    actor_id=actor_id,
                    status=status,
                    search=search,
                    author=author,
                    limit=limit,
                    offset=offset,
                )
            ),
        )

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def submit_comment(
        self, author_id: ActorId, recipe_id: UUID | str, text: str
    ) -> Result[SubmitCommentResponse]:
        """Comment on a recipe; blocklisted text waits for review."""
        return await self._execute(
            "submit_comment",
            lambda: self.submit_comment_use_case.execute(
                SubmitCommentRequest(
                    author_id=author_id, recipe_id=recipe_id, content=text
                )
            ),
        )

    async def flag_comment(
        self,
        comment_id: UUID | str,
        actor_id: ActorId,
        reason: Optional[str] = None,
    ) -> Result[FlagCommentResponse]:
        """Flag a comment for review without changing its status."""
        return await self._execute(
            "flag_comment",
            lambda: self.flag_comment_use_case.execute(
                FlagCommentRequest(comment_id=comment_id, actor_id=actor_id, reason=reason)
            ),
        )

    async def unflag_comment(
        self,
        comment_id: UUID | str,
        actor_id: ActorId,
        reason: Optional[str] = None,
    ) -> Result[FlagCommentResponse]:
        """Clear a comment's flag without changing its status."""
        return await self._execute(
            "unflag_comment",
            lambda: self.unflag_comment_use_case.execute(
                FlagCommentRequest(comment_id=comment_id, actor_id=actor_id, reason=reason)
            ),
        )

    async def list_comment_queue(
        self,
        actor_id: ActorId,
        flagged_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListCommentQueueResponse]:
        """List pending comments, or flagged comments when ``flagged_only``."""
        return await self._execute(
            "list_comment_queue",
            lambda: self.list_comment_queue_use_case.execute(
                ListCommentQueueRequest(
                    actor_id=actor_id,
                    flagged_only=flagged_only,
                    limit=limit,
                    offset=offset,
                )
            ),
        )

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------

    async def rate(
        self, user_id: ActorId, recipe_id: UUID | str, value: Any
    ) -> Result[RateRecipeResponse]:
        """Rate a recipe and return the recomputed average and count."""
        return await self._execute(
            "rate",
            lambda: self.rate_recipe_use_case.execute(
                RateRecipeRequest(user_id=user_id, recipe_id=recipe_id, value=value)
            ),
        )

    async def get_rating(
        self, user_id: ActorId, recipe_id: UUID | str
    ) -> Result[GetUserRatingResponse]:
        """Read a user's rating of a recipe."""
        return await self._execute(
            "get_rating",
            lambda: self.get_user_rating_use_case.execute(
                GetUserRatingRequest(user_id=user_id, recipe_id=recipe_id)
            ),
        )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def manage_user(
        self,
        actor_id: ActorId,
        user_id: UUID | str,
        action: str,
        reason: Optional[str] = None,
    ) -> Result[ManageUserResponse]:
        """Verify, unverify, block, suspend or reactivate an account."""
        return await self._execute(
            "manage_user",
            lambda: self.manage_user_use_case.execute(
                ManageUserRequest(
                    actor_id=actor_id, user_id=user_id, action=action, reason=reason
                )
            ),
        )

    async def flag_user(
        self,
        actor_id: ActorId,
        user_id: UUID | str,
        reason: Optional[str] = None,
    ) -> Result[FlagUserResponse]:
        """Flag an account for admin attention without changing its status."""
        return await self._execute(
            "flag_user",
            lambda: self.flag_user_use_case.execute(
                FlagUserRequest(actor_id=actor_id, user_id=user_id, reason=reason)
            ),
        )

    async def get_moderation_stats(
        self, actor_id: ActorId
    ) -> Result[GetModerationStatsResponse]:
        """Counts for the moderation dashboard."""
        return await self._execute(
            "get_moderation_stats",
            lambda: self.get_moderation_stats_use_case.execute(
                GetModerationStatsRequest(actor_id=actor_id)
            ),
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def _execute(
        self, operation: str, work: Callable[[], Awaitable[T]]
    ) -> Result[T]:
        """Run one operation inside a unit of work and wrap the outcome.

        Success commits. Failure rolls back, except for errors that
        preserve changes, which commit and still report failure.
        """
        timeout = self.settings.operation_timeout_seconds
        with logfire.span(f"moderation_service.{operation}", operation=operation):
            try:
                await self.unit_of_work.begin()
                value = await asyncio.wait_for(work(), timeout=timeout)
            except DomainError as e:
                if e.preserves_changes:
                    await self._commit(operation)
                else:
                    await self._rollback(operation)
                logfire.warn(
                    "Operation failed",
                    operation=operation,
                    kind=e.kind.value,
                    error=str(e),
                )
                return Result.failure(e.kind, str(e))
            except ValidationError as e:
                await self._rollback(operation)
                message = _validation_message(e)
                logfire.warn("Invalid payload", operation=operation, error=message)
                return Result.failure(ErrorKind.INVALID_ARGUMENT, message)
            except asyncio.TimeoutError:
                await self._rollback(operation)
                logfire.error("Operation timed out", operation=operation, timeout=timeout)
                return Result.failure(ErrorKind.UNAVAILABLE, "Operation timed out")
            except (SQLAlchemyError, OSError) as e:
                await self._rollback(operation)
                logfire.error(
                    "Store unavailable",
                    operation=operation,
                    error=str(e),
                    error_type=type(e).__name__,
                    _exc_info=True,
                )
                return Result.failure(ErrorKind.UNAVAILABLE, "Storage is unavailable")
            except Exception as e:
                await self._rollback(operation)
                logfire.error(
                    "Unexpected error",
                    operation=operation,
                    error_type=type(e).__name__,
                    _exc_info=True,
                )
                return Result.failure(ErrorKind.INTERNAL, "Internal error")

            if not await self._commit(operation):
                return Result.failure(ErrorKind.UNAVAILABLE, "Storage is unavailable")
            return Result.success(value)

    async def _commit(self, operation: str) -> bool:
        try:
            await self.unit_of_work.commit()
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "Commit failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=True,
            )
            await self._rollback(operation)
            return False
        return True

    async def _rollback(self, operation: str) -> None:
        try:
            await self.unit_of_work.rollback()
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "Rollback failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=True,
            )
