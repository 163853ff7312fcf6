"""Rating entity.

One row per (user, recipe). A second rating by the same user replaces the
first.
"""

from datetime import datetime

from pydantic import Field

from pantry.domain.model.common import DomainModel
from pantry.domain.value import RatingId, RecipeId, UserId


class Rating(DomainModel):
    """A user's star rating of a recipe."""

    id: RatingId
    user_id: UserId
    recipe_id: RecipeId
    value: int = Field(ge=1, le=5)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
