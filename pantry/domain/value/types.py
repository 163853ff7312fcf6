"""Domain value objects for pantry.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from pantry.domain.value.common import ValueObject

_ROLE_RANK = {
    "user": 0,
    "moderator": 1,
    "admin": 2,
    "owner": 3,
}


class Role(str, Enum):
    """Actor role with a total capability order.

    user < moderator < admin < owner. Capability checks compare ranks, so
    "admin-or-above" admits both admins and owners.
    """

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        """Position in the capability order."""
        return _ROLE_RANK[self.value]

    def satisfies(self, required: "Role") -> bool:
        """Check whether this role holds at least the required capability."""
        return self.rank >= required.rank


class AccountStatus(str, Enum):
    """Lifecycle status of a user account."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BLOCKED = "blocked"


class ModerationStatus(str, Enum):
    """Review status shared by recipes and comments."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationAction(str, Enum):
    """Action a moderator can take on a moderated entity.

    UNFLAG only applies to comments.
    """

    APPROVE = "approve"
    REJECT = "reject"
    UNFLAG = "unflag"


class AccountAction(str, Enum):
    """Account management action available to admins."""

    VERIFY = "verify"
    UNVERIFY = "unverify"
    BLOCK = "block"
    SUSPEND = "suspend"
    ACTIVATE = "activate"


class EntityType(str, Enum):
    """Type of entity an audit entry refers to."""

    RECIPE = "recipe"
    COMMENT = "comment"
    USER = "user"


class AuditAction(str, Enum):
    """Kind of decision recorded in the audit trail."""

    APPROVE = "approve"
    REJECT = "reject"
    FLAG = "flag"
    UNFLAG = "unflag"
    DELETE = "delete"
    VERIFY = "verify"
    UNVERIFY = "unverify"
    BLOCK = "block"
    SUSPEND = "suspend"
    ACTIVATE = "activate"


class ContentClassification(str, Enum):
    """Outcome of running text through the content filter."""

    CLEAN = "clean"
    FLAGGED = "flagged"


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


class ModerationState(ValueObject):
    """Status and publication flag, always produced together.

    A recipe is published if and only if it is approved.
    """

    status: ModerationStatus
    is_published: bool

    @classmethod
    def for_status(cls, status: ModerationStatus) -> "ModerationState":
        """Build the state for a status, deriving the publication flag."""
        return cls(status=status, is_published=status == ModerationStatus.APPROVED)

    @model_validator(mode="after")
    def validate_publication(self) -> "ModerationState":
        """Reject a publication flag that disagrees with the status."""
        if self.is_published != (self.status == ModerationStatus.APPROVED):
            raise ValueError("is_published must be true exactly when approved")
        return self


class RatingSummary(ValueObject):
    """Count and sum of the stored ratings for one recipe."""

    count: int = Field(ge=0)
    total: int = Field(ge=0)


class RecipeAggregate(ValueObject):
    """Derived rating figures for a recipe.

    Never edited directly; always computed from the full rating set.
    """

    rating: Decimal = Decimal("0.00")
    review_count: int = Field(default=0, ge=0)

    @classmethod
    def from_summary(cls, summary: RatingSummary) -> "RecipeAggregate":
        """Compute the aggregate from a rating summary.

        The average is rounded half-up to two decimal places.
        """
        if summary.count == 0:
            return cls(rating=Decimal("0.00"), review_count=0)
        average = (Decimal(summary.total) / Decimal(summary.count)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        return cls(rating=average, review_count=summary.count)


class RecipeFilter(ValueObject):
    """Criteria for the admin recipe listing.

    ``status`` None matches every status. ``search`` matches title or
    description and ``author`` matches the author's username, both as
    case-insensitive substrings.
    """

    status: Optional[ModerationStatus] = None
    search: Optional[str] = None
    author: Optional[str] = None

    def matches(self, title: str, description: Optional[str], author: str) -> bool:
        """Whether the given recipe fields satisfy the text criteria."""
        if self.search:
            needle = self.search.casefold()
            haystacks = [title, description or ""]
            if not any(needle in text.casefold() for text in haystacks):
                return False
        if self.author and self.author.casefold() not in author.casefold():
            return False
        return True
