"""Submit recipe use case."""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from pantry.application.usecase.base import BaseUseCase
from pantry.domain.service import RecipeService, UserService
from pantry.domain.value import ModerationStatus, Role, UserId


class SubmitRecipeRequest(BaseModel):
    """Submit recipe request."""

    author_id: Optional[UUID] = None
    title: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ]
    description: Optional[str] = None
    category: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)
    ]
    difficulty: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)
    ]
    prep_time_minutes: int = Field(default=0, ge=0)
    cook_time_minutes: int = Field(default=0, ge=0)
    servings: int = Field(default=1, ge=1)
    image_url: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class SubmitRecipeResponse(BaseModel):
    """Submit recipe response."""

    recipe_id: str
    status: ModerationStatus
    is_published: bool
    created_at: datetime


class SubmitRecipeUseCase(BaseUseCase):
    """Use case for submitting a new recipe for review."""

    def __init__(self, user_service: UserService, recipe_service: RecipeService) -> None:
        """Initialize submit recipe use case.

        Args:
            user_service: User domain service
            recipe_service: Recipe domain service
        """
        self.user_service = user_service
        self.recipe_service = recipe_service

    async def execute(self, request: SubmitRecipeRequest) -> SubmitRecipeResponse:
        """Execute submit recipe flow.

        Recipes always start pending and unpublished, whatever their content.

        Raises:
            NotAuthenticatedError: If the author cannot be resolved
            ForbiddenError: If the author's account is not active
        """
        author = await self.user_service.authorize(
            UserId(request.author_id) if request.author_id else None,
            Role.USER,
            "submit recipes",
        )

        recipe = await self.recipe_service.create_recipe(
            author=author,
            title=request.title,
            category=request.category,
            difficulty=request.difficulty,
            description=request.description,
            prep_time_minutes=request.prep_time_minutes,
            cook_time_minutes=request.cook_time_minutes,
            servings=request.servings,
            image_url=request.image_url,
            ingredients=request.ingredients,
            instructions=request.instructions,
            tags=request.tags,
        )

        return SubmitRecipeResponse(
            recipe_id=str(recipe.id),
            status=recipe.status,
            is_published=recipe.is_published,
            created_at=recipe.created_at,
        )
