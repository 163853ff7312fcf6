"""Repository interfaces for pantry domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from pantry.domain.repository.audit import AuditRepository
from pantry.domain.repository.comment import CommentRepository
from pantry.domain.repository.rating import RatingRepository
from pantry.domain.repository.recipe import RecipeRepository
from pantry.domain.repository.unit_of_work import UnitOfWork
from pantry.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "RecipeRepository",
    "CommentRepository",
    "RatingRepository",
    "AuditRepository",
    "UnitOfWork",
]
