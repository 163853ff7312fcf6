"""Domain services."""

from .audit_recorder import AuditRecorder
from .base import Service, evolve
from .comment_service import CommentService
from .content_filter import ContentFilter
from .moderation_state import ModerationStateMachine
from .rating_aggregator import RatingAggregator
from .recipe_service import RecipeService
from .user_service import UserService

__all__ = [
    "AuditRecorder",
    "CommentService",
    "ContentFilter",
    "ModerationStateMachine",
    "RatingAggregator",
    "RecipeService",
    "Service",
    "UserService",
    "evolve",
]
