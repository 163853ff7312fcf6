"""Delete recipe use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from pantry.domain.error import ConflictError
from pantry.domain.service import (
    AuditRecorder,
    CommentService,
    RatingAggregator,
    RecipeService,
    UserService,
)
from pantry.domain.value import AuditAction, EntityType, RecipeId, Role, UserId


class DeleteRecipeRequest(BaseModel):
    """Delete recipe request."""

    recipe_id: UUID
    actor_id: Optional[UUID] = None
    reason: Optional[str] = None


class DeletedRecipe(BaseModel):
    """Identity of the recipe that was removed."""

    id: str
    title: str
    author: str


class DeletedBy(BaseModel):
    """Actor who removed the recipe."""

    id: str
    username: str
    role: str


class DeleteRecipeResponse(BaseModel):
    """Delete recipe response."""

    deleted_recipe: DeletedRecipe
    deleted_by: DeletedBy
    reason: str
    timestamp: datetime
    ratings_removed: int
    comments_removed: int
    audit_recorded: bool


class DeleteRecipeUseCase:
    """Use case for hard-deleting a recipe and everything that references it."""

    def __init__(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
        rating_aggregator: RatingAggregator,
        audit_recorder: AuditRecorder,
    ) -> None:
        """Initialize delete recipe use case.

        Args:
            user_service: User domain service
            recipe_service: Recipe domain service
            comment_service: Comment domain service
            rating_aggregator: Rating aggregation service
            audit_recorder: Audit trail writer
        """
        self.user_service = user_service
        self.recipe_service = recipe_service
        self.comment_service = comment_service
        self.rating_aggregator = rating_aggregator
        self.audit_recorder = audit_recorder

    async def execute(self, request: DeleteRecipeRequest) -> DeleteRecipeResponse:
        """Execute delete recipe flow.

        Steps:
        1. Check the actor is admin or above
        2. Load the recipe and keep its snapshot
        3. Remove its ratings, then its comments
        4. Record one audit entry with the pre-deletion snapshot
        5. Delete the recipe row and re-read to verify it is gone

        Steps already run are not undone if verification fails.

        Raises:
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below admin
            NotFoundError: If the recipe does not exist
            ConflictError: If the recipe is still present after deletion
        """
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.ADMIN,
            "delete recipes",
        )

        recipe_id = RecipeId(request.recipe_id)
        recipe = await self.recipe_service.require_recipe(recipe_id)

        with logfire.span(
            "delete_recipe.cascade",
            recipe_id=str(recipe_id),
            actor_id=str(actor.id),
        ):
            ratings_removed = await self.rating_aggregator.delete_for_recipe(recipe_id)
            comments_removed = await self.comment_service.delete_for_recipe(recipe_id)

            entry = await self.audit_recorder.record(
                entity_id=recipe.id,
                entity_type=EntityType.RECIPE,
                snapshot=recipe,
                actor=actor,
                action=AuditAction.DELETE,
                reason=request.reason,
                entity_title=recipe.title,
            )

            if not await self.recipe_service.delete_recipe(recipe_id):
                raise ConflictError(f"Recipe {recipe_id} still exists after deletion")

        return DeleteRecipeResponse(
            deleted_recipe=DeletedRecipe(
                id=str(recipe.id),
                title=recipe.title,
                author=recipe.author_username,
            ),
            deleted_by=DeletedBy(
                id=str(actor.id),
                username=actor.username,
                role=actor.role.value,
            ),
            reason=request.reason or self.audit_recorder.default_reason,
            timestamp=datetime.now(),
            ratings_removed=ratings_removed,
            comments_removed=comments_removed,
            audit_recorded=entry is not None,
        )
