"""Recipe aggregate root.

Recipes start pending and only become visible once a moderator approves
them. Their rating fields are derived from the ratings table.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field, model_validator

from pantry.domain.model.common import DomainModel
from pantry.domain.value import (
    ModerationState,
    ModerationStatus,
    RecipeAggregate,
    RecipeId,
    UserId,
)


class Recipe(DomainModel):
    """Recipe aggregate root.

    Invariant: ``is_published`` is true if and only if ``status`` is approved.
    ``rating`` and ``review_count`` are never edited by hand.
    """

    id: RecipeId
    author_id: UserId
    author_username: str
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: str = Field(min_length=1, max_length=50)
    difficulty: str = Field(min_length=1, max_length=20)
    prep_time_minutes: int = Field(default=0, ge=0)
    cook_time_minutes: int = Field(default=0, ge=0)
    servings: int = Field(default=1, ge=1)
    image_url: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    rating: Decimal = Decimal("0.00")
    review_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    status: ModerationStatus = ModerationStatus.PENDING
    is_published: bool = False
    moderation_reason: Optional[str] = None
    moderated_by: Optional[UserId] = None
    moderated_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_publication(self) -> "Recipe":
        """Keep the publication flag coupled to the moderation status."""
        if self.is_published != (self.status == ModerationStatus.APPROVED):
            raise ValueError("Recipe is published if and only if it is approved")
        return self

    @property
    def moderation_state(self) -> ModerationState:
        """Current status and publication flag."""
        return ModerationState(status=self.status, is_published=self.is_published)

    @property
    def aggregate(self) -> RecipeAggregate:
        """Current derived rating figures."""
        return RecipeAggregate(rating=self.rating, review_count=self.review_count)


class RecipeEdits(DomainModel):
    """Corrections a moderator may apply while approving a recipe.

    Unknown fields are rejected rather than dropped.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    ingredients: Optional[list[str]] = None
    instructions: Optional[list[str]] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    difficulty: Optional[str] = Field(default=None, min_length=1, max_length=20)

    def as_update(self) -> dict:
        """Fields that were actually provided."""
        return self.model_dump(exclude_none=True)
