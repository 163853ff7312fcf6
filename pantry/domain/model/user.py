"""User entity.

Users are owned by the identity store; the moderation core only reads the
fields it needs to authorize an action and the account flags admins manage.
A moderator flag marks an account for admin attention and leaves its status
alone.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pantry.domain.model.common import DomainModel
from pantry.domain.value import AccountStatus, Role, UserId


class User(DomainModel):
    """Actor identity resolved from the identity store."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    email: Optional[str] = None
    role: Role = Role.USER
    status: AccountStatus = AccountStatus.ACTIVE
    is_verified: bool = False
    is_flagged: bool = False
    flag_reason: Optional[str] = None
    flagged_by: Optional[UserId] = None
    flagged_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        """Whether the account may perform actions."""
        return self.status == AccountStatus.ACTIVE

    def has_capability(self, required: Role) -> bool:
        """Check role capability and account status together."""
        return self.is_active and self.role.satisfies(required)
