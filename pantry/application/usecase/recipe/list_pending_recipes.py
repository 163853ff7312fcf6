"""List pending recipes use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from pantry.domain.service import RecipeService, UserService
from pantry.domain.value import ModerationStatus, Role, UserId


class ListPendingRecipesRequest(BaseModel):
    """List pending recipes request."""

    actor_id: Optional[UUID] = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class PendingRecipe(BaseModel):
    """Recipe awaiting review."""

    recipe_id: str
    title: str
    category: str
    difficulty: str
    author_id: str
    author_username: str
    created_at: datetime


class ListPendingRecipesResponse(BaseModel):
    """List pending recipes response."""

    recipes: list[PendingRecipe]
    limit: int
    offset: int


class ListPendingRecipesUseCase:
    """Use case for listing the recipe review queue, oldest first."""

    def __init__(self, user_service: UserService, recipe_service: RecipeService) -> None:
        self.user_service = user_service
        self.recipe_service = recipe_service

    async def execute(
        self, request: ListPendingRecipesRequest
    ) -> ListPendingRecipesResponse:
        """Execute list pending recipes flow."""
        await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "review recipes",
        )

        recipes = await self.recipe_service.list_by_status(
            ModerationStatus.PENDING, limit=request.limit, offset=request.offset
        )

        return ListPendingRecipesResponse(
            recipes=[
                PendingRecipe(
                    recipe_id=str(recipe.id),
                    title=recipe.title,
                    category=recipe.category,
                    difficulty=recipe.difficulty,
                    author_id=str(recipe.author_id),
                    author_username=recipe.author_username,
                    created_at=recipe.created_at,
                )
                for recipe in recipes
            ],
            limit=request.limit,
            offset=request.offset,
        )
