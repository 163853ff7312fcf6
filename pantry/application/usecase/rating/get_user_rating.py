"""Get user rating use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pantry.domain.service import RatingAggregator, UserService
from pantry.domain.value import RecipeId, UserId


class GetUserRatingRequest(BaseModel):
    """Get user rating request."""

    user_id: Optional[UUID] = None
    recipe_id: UUID


class GetUserRatingResponse(BaseModel):
    """Get user rating response. ``value`` is None if the user never rated."""

    recipe_id: str
    value: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GetUserRatingUseCase:
    """Use case for reading a user's own rating of a recipe."""

    def __init__(
        self, user_service: UserService, rating_aggregator: RatingAggregator
    ) -> None:
        self.user_service = user_service
        self.rating_aggregator = rating_aggregator

    async def execute(self, request: GetUserRatingRequest) -> GetUserRatingResponse:
        """Execute get user rating flow. Has no side effects."""
        user = await self.user_service.resolve_actor(
            UserId(request.user_id) if request.user_id else None
        )
        rating = await self.rating_aggregator.get(user.id, RecipeId(request.recipe_id))

        if rating is None:
            return GetUserRatingResponse(recipe_id=str(request.recipe_id))

        return GetUserRatingResponse(
            recipe_id=str(rating.recipe_id),
            value=rating.value,
            created_at=rating.created_at,
            updated_at=rating.updated_at,
        )
