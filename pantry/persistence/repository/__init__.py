"""PostgreSQL repository implementations."""

from pantry.persistence.repository.audit import PostgresAuditRepository
from pantry.persistence.repository.comment import PostgresCommentRepository
from pantry.persistence.repository.rating import PostgresRatingRepository
from pantry.persistence.repository.recipe import PostgresRecipeRepository
from pantry.persistence.repository.unit_of_work import PostgresUnitOfWork
from pantry.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresRecipeRepository",
    "PostgresCommentRepository",
    "PostgresRatingRepository",
    "PostgresAuditRepository",
    "PostgresUnitOfWork",
]
