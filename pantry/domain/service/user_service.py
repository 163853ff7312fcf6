"""User domain service."""

from datetime import datetime
from typing import Optional

import logfire

from pantry.domain.error import ForbiddenError, NotAuthenticatedError, NotFoundError
from pantry.domain.model import User
from pantry.domain.repository import UserRepository
from pantry.domain.value import AccountAction, AccountStatus, Role, UserId

from .base import Service, evolve


class UserService(Service):
    """Domain service for resolving actors and managing accounts."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def resolve_actor(self, actor_id: Optional[UserId]) -> User:
        """Resolve the identity behind an action.

        Args:
            actor_id: Acting user's ID, None when the caller is anonymous

        Returns:
            The acting user

        Raises:
            NotAuthenticatedError: If no identity can be resolved
        """
        if actor_id is None:
            logfire.warn("Action without actor identity")
            raise NotAuthenticatedError()

        with logfire.span("user_service.resolve_actor", actor_id=str(actor_id)):
            actor = await self.user_repository.find_by_id(actor_id)
            if actor is None:
                logfire.warn("Actor not resolvable", actor_id=str(actor_id))
                raise NotAuthenticatedError(str(actor_id))
            return actor

    async def authorize(
        self, actor_id: Optional[UserId], required: Role, action: str
    ) -> User:
        """Resolve an actor and check they may perform an action.

        Args:
            actor_id: Acting user's ID
            required: Minimum role for the action
            action: Description of the action, used in error messages

        Returns:
            The authorized actor

        Raises:
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the account is not active or the role is
                below ``required``
        """
        actor = await self.resolve_actor(actor_id)
        if not actor.is_active:
            logfire.warn(
                "Inactive account attempted action",
                actor_id=str(actor.id),
                status=actor.status.value,
                action=action,
            )
            raise ForbiddenError(
                action, str(actor.id), detail=f"Account is {actor.status.value}"
            )
        if not actor.role.satisfies(required):
            logfire.warn(
                "Insufficient permissions",
                actor_id=str(actor.id),
                role=actor.role.value,
                required=required.value,
                action=action,
            )
            raise ForbiddenError(action, str(actor.id))
        return actor

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def apply_account_action(self, user: User, action: AccountAction) -> User:
        """Apply an account management action and persist it.

        Args:
            user: Target user
            action: Action to apply

        Returns:
            The updated user
        """
        with logfire.span(
            "user_service.apply_account_action",
            user_id=str(user.id),
            action=action.value,
        ):
            changes: dict = {"updated_at": datetime.now()}
            if action == AccountAction.VERIFY:
                changes["is_verified"] = True
            elif action == AccountAction.UNVERIFY:
                changes["is_verified"] = False
            elif action == AccountAction.BLOCK:
                changes["status"] = AccountStatus.BLOCKED
            elif action == AccountAction.SUSPEND:
                changes["status"] = AccountStatus.SUSPENDED
            else:  # AccountAction.ACTIVATE
                changes["status"] = AccountStatus.ACTIVE

            saved = await self.user_repository.save(evolve(user, **changes))
            logfire.info(
                "Account updated",
                user_id=str(saved.id),
                action=action.value,
                status=saved.status.value,
                is_verified=saved.is_verified,
            )
            return saved

    async def flag(self, user: User, actor: User, reason: str) -> User:
        """Flag an account for admin attention and persist it.

        The account status is left unchanged; re-flagging replaces the
        previous reason.

        Args:
            user: Target user
            actor: Moderator raising the flag
            reason: Why the account was flagged

        Returns:
            The updated user
        """
        with logfire.span(
            "user_service.flag", user_id=str(user.id), actor_id=str(actor.id)
        ):
            now = datetime.now()
            saved = await self.user_repository.save(
                evolve(
                    user,
                    is_flagged=True,
                    flag_reason=reason,
                    flagged_by=actor.id,
                    flagged_at=now,
                    updated_at=now,
                )
            )
            logfire.info("Account flagged", user_id=str(saved.id), reason=reason)
            return saved
