"""In-memory repository implementations for testing."""

from .audit import InMemoryAuditRepository
from .comment import InMemoryCommentRepository
from .rating import InMemoryRatingRepository
from .recipe import InMemoryRecipeRepository
from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuditRepository",
    "InMemoryCommentRepository",
    "InMemoryRatingRepository",
    "InMemoryRecipeRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
