"""Moderate recipe use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pantry.application.usecase.base import BaseUseCase
from pantry.domain.model import RecipeEdits
from pantry.domain.service import (
    AuditRecorder,
    ModerationStateMachine,
    RecipeService,
    UserService,
)
from pantry.domain.value import (
    AuditAction,
    EntityType,
    ModerationStatus,
    RecipeId,
    Role,
    UserId,
)


class ModerateRecipeRequest(BaseModel):
    """Moderate recipe request."""

    recipe_id: UUID
    action: str
    actor_id: Optional[UUID] = None
    reason: Optional[str] = None
    edits: Optional[RecipeEdits] = None


class ModerateRecipeResponse(BaseModel):
    """Moderate recipe response."""

    recipe_id: str
    status: ModerationStatus
    is_published: bool
    moderated_by: str
    moderated_at: datetime
    reason: Optional[str]
    audit_recorded: bool


class ModerateRecipeUseCase(BaseUseCase):
    """Use case for approving or rejecting a recipe."""

    def __init__(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> None:
        """Initialize moderate recipe use case.

        Args:
            user_service: User domain service
            recipe_service: Recipe domain service
            state_machine: Moderation transitions
            audit_recorder: Audit trail writer
        """
        self.user_service = user_service
        self.recipe_service = recipe_service
        self.state_machine = state_machine
        self.audit_recorder = audit_recorder

    async def execute(self, request: ModerateRecipeRequest) -> ModerateRecipeResponse:
        """Execute moderate recipe flow.

        Steps:
        1. Parse the action token (before any lookup)
        2. Check the actor holds moderator capability
        3. Load the recipe and apply the transition (plus edits on approve)
        4. Save, then record the decision with the pre-action snapshot

        Raises:
            InvalidArgumentError: If the action is not approve or reject
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator
            NotFoundError: If the recipe does not exist
        """
        action = self.state_machine.parse_action(request.action, EntityType.RECIPE)
        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            f"{action.value} recipes",
        )

        recipe = await self.recipe_service.require_recipe(RecipeId(request.recipe_id))
        moderated = self.state_machine.moderate_recipe(
            recipe, action, actor, reason=request.reason, edits=request.edits
        )
        saved = await self.recipe_service.save(moderated)

        entry = await self.audit_recorder.record(
            entity_id=recipe.id,
            entity_type=EntityType.RECIPE,
            snapshot=recipe,
            actor=actor,
            action=AuditAction(action.value),
            reason=request.reason,
            entity_title=recipe.title,
        )

        return ModerateRecipeResponse(
            recipe_id=str(saved.id),
            status=saved.status,
            is_published=saved.is_published,
            moderated_by=str(actor.id),
            moderated_at=saved.moderated_at or moderated.updated_at,
            reason=saved.moderation_reason,
            audit_recorded=entry is not None,
        )
