"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map rows by hand
instead of using SQLAlchemy's ORM.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict
from uuid import UUID

from pantry.domain.model import AuditEntry, Comment, Rating, Recipe, User
from pantry.domain.value import (
    AccountStatus,
    AuditAction,
    AuditEntryId,
    CommentId,
    EntityType,
    ModerationStatus,
    RatingId,
    RecipeId,
    Role,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def _to_db(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace enum members with their stored values."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    flagged_by = _optional_uuid(row.get("flagged_by"))
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=row.get("email"),
        role=Role(row["role"]),
        status=AccountStatus(row["status"]),
        is_verified=row["is_verified"],
        is_flagged=row.get("is_flagged", False),
        flag_reason=row.get("flag_reason"),
        flagged_by=UserId(flagged_by) if flagged_by else None,
        flagged_at=row.get("flagged_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return _to_db(user.model_dump())


def row_to_recipe(row: Dict[str, Any]) -> Recipe:
    """Convert database row to Recipe domain model.

    Args:
        row: Database row as dict

    Returns:
        Recipe domain model
    """
    moderated_by = _optional_uuid(row.get("moderated_by"))
    return Recipe(
        id=RecipeId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=row["author_username"],
        title=row["title"],
        description=row.get("description"),
        category=row["category"],
        difficulty=row["difficulty"],
        prep_time_minutes=row["prep_time_minutes"],
        cook_time_minutes=row["cook_time_minutes"],
        servings=row["servings"],
        image_url=row.get("image_url"),
        ingredients=list(row.get("ingredients") or []),
        instructions=list(row.get("instructions") or []),
        tags=list(row.get("tags") or []),
        rating=Decimal(row["rating"]),
        review_count=row["review_count"],
        view_count=row["view_count"],
        status=ModerationStatus(row["status"]),
        is_published=row["is_published"],
        moderation_reason=row.get("moderation_reason"),
        moderated_by=UserId(moderated_by) if moderated_by else None,
        moderated_at=row.get("moderated_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def recipe_to_dict(recipe: Recipe) -> Dict[str, Any]:
    """Convert Recipe domain model to database dict."""
    return _to_db(recipe.model_dump())


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    moderated_by = _optional_uuid(row.get("moderated_by"))
    flagged_by = _optional_uuid(row.get("flagged_by"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        recipe_id=RecipeId(_uuid(row["recipe_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=row["author_username"],
        content=row["content"],
        status=ModerationStatus(row["status"]),
        moderation_reason=row.get("moderation_reason"),
        moderated_by=UserId(moderated_by) if moderated_by else None,
        moderated_at=row.get("moderated_at"),
        is_flagged=row["is_flagged"],
        flag_reason=row.get("flag_reason"),
        flagged_by=UserId(flagged_by) if flagged_by else None,
        flagged_at=row.get("flagged_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return _to_db(comment.model_dump())


def row_to_rating(row: Dict[str, Any]) -> Rating:
    """Convert database row to Rating domain model."""
    return Rating(
        id=RatingId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        recipe_id=RecipeId(_uuid(row["recipe_id"])),
        value=row["value"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def rating_to_dict(rating: Rating) -> Dict[str, Any]:
    """Convert Rating domain model to database dict."""
    return rating.model_dump()


def row_to_audit_entry(row: Dict[str, Any]) -> AuditEntry:
    """Convert database row to AuditEntry domain model."""
    return AuditEntry(
        id=AuditEntryId(_uuid(row["id"])),
        entity_id=_uuid(row["entity_id"]),
        entity_type=EntityType(row["entity_type"]),
        entity_title=row.get("entity_title"),
        snapshot=dict(row.get("snapshot") or {}),
        actor_id=UserId(_uuid(row["actor_id"])),
        actor_username=row["actor_username"],
        action=AuditAction(row["action"]),
        reason=row["reason"],
        created_at=row["created_at"],
    )


def audit_entry_to_dict(entry: AuditEntry) -> Dict[str, Any]:
    """Convert AuditEntry domain model to database dict."""
    return _to_db(entry.model_dump())
