"""Rate recipe use case."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, StrictInt

from pantry.config import ModerationSettings
from pantry.domain.error import NotFoundError
from pantry.domain.service import RatingAggregator, RecipeService, UserService
from pantry.domain.value import RecipeId, Role, UserId


class RateRecipeRequest(BaseModel):
    """Rate recipe request."""

    user_id: Optional[UUID] = None
    recipe_id: UUID
    value: StrictInt


class RateRecipeResponse(BaseModel):
    """Rate recipe response."""

    recipe_id: str
    value: int
    average: Decimal
    count: int


class RateRecipeUseCase:
    """Use case for rating a recipe from 1 to 5 stars."""

    def __init__(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        rating_aggregator: RatingAggregator,
        settings: ModerationSettings,
    ) -> None:
        """Initialize rate recipe use case.

        Args:
            user_service: User domain service
            recipe_service: Recipe domain service
            rating_aggregator: Rating aggregation service
            settings: Moderation settings
        """
        self.user_service = user_service
        self.recipe_service = recipe_service
        self.rating_aggregator = rating_aggregator
        self.settings = settings

    async def execute(self, request: RateRecipeRequest) -> RateRecipeResponse:
        """Execute rate recipe flow.

        Steps:
        1. Validate the star value (before any lookup)
        2. Resolve the rating user
        3. Check the recipe exists and, by default, is published
        4. Upsert the rating and recompute the aggregate

        Raises:
            InvalidArgumentError: If value is outside [1, 5]
            NotAuthenticatedError: If the user cannot be resolved
            ForbiddenError: If the user's account is not active
            NotFoundError: If the recipe does not exist or is not published
        """
        value = self.rating_aggregator.validate_value(request.value)
        user = await self.user_service.authorize(
            UserId(request.user_id) if request.user_id else None,
            Role.USER,
            "rate recipes",
        )

        recipe_id = RecipeId(request.recipe_id)
        recipe = await self.recipe_service.get_recipe_by_id(recipe_id)
        if recipe is None or (
            self.settings.ratings_require_published and not recipe.is_published
        ):
            raise NotFoundError("Recipe", str(recipe_id))

        aggregate = await self.rating_aggregator.submit(user.id, recipe_id, value)

        return RateRecipeResponse(
            recipe_id=str(recipe_id),
            value=value,
            average=aggregate.rating,
            count=aggregate.review_count,
        )
