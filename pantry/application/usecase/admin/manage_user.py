"""Manage user account use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pantry.application.usecase.base import BaseUseCase
from pantry.domain.error import ForbiddenError, InvalidArgumentError
from pantry.domain.service import AuditRecorder, UserService
from pantry.domain.value import (
    AccountAction,
    AccountStatus,
    AuditAction,
    EntityType,
    Role,
    UserId,
)


class ManageUserRequest(BaseModel):
    """Manage user request."""

    actor_id: Optional[UUID] = None
    user_id: UUID
    action: str
    reason: Optional[str] = None


class ManageUserResponse(BaseModel):
    """Manage user response."""

    user_id: str
    username: str
    role: Role
    status: AccountStatus
    is_verified: bool
    audit_recorded: bool


class ManageUserUseCase(BaseUseCase):
    """Use case for verifying, blocking, suspending or reactivating accounts."""

    def __init__(self, user_service: UserService, audit_recorder: AuditRecorder) -> None:
        """Initialize manage user use case.

        Args:
            user_service: User domain service
            audit_recorder: Audit trail writer
        """
        self.user_service = user_service
        self.audit_recorder = audit_recorder

    async def execute(self, request: ManageUserRequest) -> ManageUserResponse:
        """Execute manage user flow.

        An actor may not manage an account whose role outranks their own.

        Raises:
            InvalidArgumentError: If the action token is unknown
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below admin or outranked by the
                target
            NotFoundError: If the target user does not exist
        """
        try:
            action = AccountAction(request.action)
        except ValueError:
            raise InvalidArgumentError(f"Unknown account action: {request.action!r}")

        actor = await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.ADMIN,
            "manage users",
        )
        target = await self.user_service.get_by_id(UserId(request.user_id))
        if target.role.rank > actor.role.rank:
            raise ForbiddenError(
                f"{action.value} a {target.role.value} account", str(actor.id)
            )

        updated = await self.user_service.apply_account_action(target, action)

        entry = await self.audit_recorder.record(
            entity_id=target.id,
            entity_type=EntityType.USER,
            snapshot=target,
            actor=actor,
            action=AuditAction(action.value),
            reason=request.reason,
            entity_title=target.username,
        )

        return ManageUserResponse(
            user_id=str(updated.id),
            username=updated.username,
            role=updated.role,
            status=updated.status,
            is_verified=updated.is_verified,
            audit_recorded=entry is not None,
        )
