"""Domain value objects for pantry."""

from pantry.domain.value.identifiers import (
    AuditEntryId,
    CommentId,
    RatingId,
    RecipeId,
    UserId,
)
from pantry.domain.value.types import (
    AccountAction,
    AccountStatus,
    AuditAction,
    ContentClassification,
    EntityType,
    ErrorKind,
    ModerationAction,
    ModerationState,
    ModerationStatus,
    RatingSummary,
    RecipeAggregate,
    RecipeFilter,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "RecipeId",
    "CommentId",
    "RatingId",
    "AuditEntryId",
    # Types
    "Role",
    "AccountStatus",
    "AccountAction",
    "ModerationStatus",
    "ModerationAction",
    "ModerationState",
    "EntityType",
    "AuditAction",
    "ContentClassification",
    "ErrorKind",
    "RatingSummary",
    "RecipeAggregate",
    "RecipeFilter",
]
