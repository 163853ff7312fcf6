"""Shared state for the in-memory repositories."""

import asyncio
from dataclasses import dataclass, field

from pantry.domain.model import AuditEntry, Comment, Rating, Recipe, User
from pantry.domain.value import CommentId, RecipeId, UserId


@dataclass
class InMemoryStore:
    """Tables shared by the in-memory repositories of one container scope.

    Models are immutable, so a snapshot only needs to copy the containers.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    recipes: dict[RecipeId, Recipe] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    ratings: list[Rating] = field(default_factory=list)
    audit_log: list[AuditEntry] = field(default_factory=list)
    recipe_locks: dict[RecipeId, asyncio.Lock] = field(default_factory=dict)

    def snapshot(self) -> dict:
        """Capture the current table contents."""
        return {
            "users": dict(self.users),
            "recipes": dict(self.recipes),
            "comments": dict(self.comments),
            "ratings": list(self.ratings),
            "audit_log": list(self.audit_log),
        }

    def restore(self, snapshot: dict) -> None:
        """Put back table contents captured by ``snapshot``."""
        self.users = dict(snapshot["users"])
        self.recipes = dict(snapshot["recipes"])
        self.comments = dict(snapshot["comments"])
        self.ratings = list(snapshot["ratings"])
        self.audit_log = list(snapshot["audit_log"])

    def lock_for(self, recipe_id: RecipeId) -> asyncio.Lock:
        """Get the lock serializing writers of one recipe."""
        if recipe_id not in self.recipe_locks:
            self.recipe_locks[recipe_id] = asyncio.Lock()
        return self.recipe_locks[recipe_id]
