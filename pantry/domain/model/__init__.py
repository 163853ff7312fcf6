"""Domain model entities for pantry."""

from pantry.domain.model.audit import AuditEntry
from pantry.domain.model.comment import Comment
from pantry.domain.model.rating import Rating
from pantry.domain.model.recipe import Recipe, RecipeEdits
from pantry.domain.model.user import User

__all__ = [
    "User",
    "Recipe",
    "RecipeEdits",
    "Comment",
    "Rating",
    "AuditEntry",
]
