"""Comment entity.

Comments carry a review status plus an independent flag that moderators
toggle. Flagging never changes the status.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pantry.domain.model.common import DomainModel
from pantry.domain.value import CommentId, ModerationStatus, RecipeId, UserId


class Comment(DomainModel):
    """Comment on a recipe."""

    id: CommentId
    recipe_id: RecipeId
    author_id: UserId
    author_username: str
    content: str = Field(min_length=1, max_length=5000)
    status: ModerationStatus = ModerationStatus.PENDING
    moderation_reason: Optional[str] = None
    moderated_by: Optional[UserId] = None
    moderated_at: Optional[datetime] = None
    is_flagged: bool = False
    flag_reason: Optional[str] = None
    flagged_by: Optional[UserId] = None
    flagged_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
