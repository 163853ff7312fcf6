"""Entity identifiers.

Distinct NewTypes over UUID so a recipe ID cannot be passed where a user
ID is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
RecipeId = NewType("RecipeId", UUID)
CommentId = NewType("CommentId", UUID)
RatingId = NewType("RatingId", UUID)
AuditEntryId = NewType("AuditEntryId", UUID)
