"""Moderation state machine for recipes and comments.

States: pending (initial), approved, rejected. Any status can be moderated
again. Comments also carry a flag that is toggled independently of status.
"""

from datetime import datetime
from typing import Optional, Union

from pantry.domain.error import ForbiddenError, InvalidArgumentError
from pantry.domain.model import Comment, Recipe, RecipeEdits, User
from pantry.domain.value import (
    ContentClassification,
    EntityType,
    ModerationAction,
    ModerationState,
    ModerationStatus,
    Role,
)

from .base import Service, evolve

_ALLOWED_ACTIONS = {
    EntityType.RECIPE: frozenset({ModerationAction.APPROVE, ModerationAction.REJECT}),
    EntityType.COMMENT: frozenset(
        {ModerationAction.APPROVE, ModerationAction.REJECT, ModerationAction.UNFLAG}
    ),
}


class ModerationStateMachine(Service):
    """Pure transition functions for moderated entities.

    Methods return new immutable entities and never touch storage.
    """

    def __init__(self, clear_flag_on_review: bool = False) -> None:
        """Initialize state machine.

        Args:
            clear_flag_on_review: Whether approve/reject of a flagged comment
                also clears the flag
        """
        self.clear_flag_on_review = clear_flag_on_review

    @staticmethod
    def parse_entity_type(token: Union[str, EntityType]) -> EntityType:
        """Parse a moderated entity type token.

        Raises:
            InvalidArgumentError: If the token is not recipe or comment
        """
        try:
            entity_type = EntityType(token)
        except ValueError:
            raise InvalidArgumentError(f"Unknown entity type: {token!r}")
        if entity_type not in _ALLOWED_ACTIONS:
            raise InvalidArgumentError(f"Entity type cannot be moderated: {token!r}")
        return entity_type

    @staticmethod
    def parse_action(
        token: Union[str, ModerationAction], entity_type: EntityType
    ) -> ModerationAction:
        """Parse a moderation action token for an entity type.

        Raises:
            InvalidArgumentError: If the token is unknown or not valid for
                the entity type
        """
        try:
            action = ModerationAction(token)
        except ValueError:
            raise InvalidArgumentError(f"Unknown moderation action: {token!r}")
        if action not in _ALLOWED_ACTIONS[entity_type]:
            raise InvalidArgumentError(
                f"Action {action.value!r} is not valid for {entity_type.value}"
            )
        return action

    @staticmethod
    def require_moderator(actor: User, action: str) -> None:
        """Ensure the actor holds moderator-or-above capability.

        Raises:
            ForbiddenError: If the actor's role is too low or the account
                is not active
        """
        if not actor.has_capability(Role.MODERATOR):
            raise ForbiddenError(action, str(actor.id))

    @staticmethod
    def transition(action: ModerationAction) -> ModerationState:
        """Compute the state a review action leads to.

        The status and publication flag are always produced together.

        Raises:
            InvalidArgumentError: If the action is not a review action
        """
        if action == ModerationAction.APPROVE:
            return ModerationState.for_status(ModerationStatus.APPROVED)
        if action == ModerationAction.REJECT:
            return ModerationState.for_status(ModerationStatus.REJECTED)
        raise InvalidArgumentError(f"Action {action.value!r} does not change status")

    @staticmethod
    def initial_recipe_state() -> ModerationState:
        """Recipes always start pending, regardless of content."""
        return ModerationState.for_status(ModerationStatus.PENDING)

    @staticmethod
    def initial_comment_status(
        classification: ContentClassification,
    ) -> ModerationStatus:
        """Clean comments skip review; flagged text waits for a moderator."""
        if classification == ContentClassification.FLAGGED:
            return ModerationStatus.PENDING
        return ModerationStatus.APPROVED

    def moderate_recipe(
        self,
        recipe: Recipe,
        action: ModerationAction,
        actor: User,
        reason: Optional[str] = None,
        edits: Optional[RecipeEdits] = None,
        now: Optional[datetime] = None,
    ) -> Recipe:
        """Approve or reject a recipe.

        Moderating to the current status still refreshes the moderator
        fields. Edits are applied only when approving.
        """
        self.require_moderator(actor, f"{action.value} recipes")
        state = self.transition(action)
        now = now or datetime.now()

        changes = {}
        if edits is not None and action == ModerationAction.APPROVE:
            changes.update(edits.as_update())

        return evolve(
            recipe,
            **changes,
            status=state.status,
            is_published=state.is_published,
            moderation_reason=reason,
            moderated_by=actor.id,
            moderated_at=now,
            updated_at=now,
        )

    def moderate_comment(
        self,
        comment: Comment,
        action: ModerationAction,
        actor: User,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Comment:
        """Approve, reject or unflag a comment.

        Unflag leaves the status alone. Approve and reject leave the flag
        alone unless ``clear_flag_on_review`` is set.
        """
        self.require_moderator(actor, f"{action.value} comments")
        if action == ModerationAction.UNFLAG:
            return self.unflag(comment, actor, now=now)

        state = self.transition(action)
        now = now or datetime.now()

        changes = {}
        if self.clear_flag_on_review and comment.is_flagged:
            changes.update(self._cleared_flag())

        return evolve(
            comment,
            **changes,
            status=state.status,
            moderation_reason=reason,
            moderated_by=actor.id,
            moderated_at=now,
            updated_at=now,
        )

    def flag(
        self,
        comment: Comment,
        actor: User,
        reason: str,
        now: Optional[datetime] = None,
    ) -> Comment:
        """Flag a comment for review without changing its status."""
        self.require_moderator(actor, "flag comments")
        now = now or datetime.now()
        return evolve(
            comment,
            is_flagged=True,
            flag_reason=reason,
            flagged_by=actor.id,
            flagged_at=now,
            updated_at=now,
        )

    def unflag(
        self,
        comment: Comment,
        actor: User,
        now: Optional[datetime] = None,
    ) -> Comment:
        """Clear a comment's flag without changing its status."""
        self.require_moderator(actor, "unflag comments")
        now = now or datetime.now()
        return evolve(comment, **self._cleared_flag(), updated_at=now)

    @staticmethod
    def _cleared_flag() -> dict:
        return {
            "is_flagged": False,
            "flag_reason": None,
            "flagged_by": None,
            "flagged_at": None,
        }
