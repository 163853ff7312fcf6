"""List recipes use case."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from pantry.application.usecase.base import BaseUseCase
from pantry.domain.error import InvalidArgumentError
from pantry.domain.service import RecipeService, UserService
from pantry.domain.value import ModerationStatus, RecipeFilter, Role, UserId

ALL_STATUSES = "all"

SearchText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class ListRecipesRequest(BaseModel):
    """List recipes request."""

    actor_id: Optional[UUID] = None
    status: str = ALL_STATUSES
    search: Optional[SearchText] = None
    author: Optional[SearchText] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class RecipeSummary(BaseModel):
    """One row of the recipe listing."""

    recipe_id: str
    title: str
    category: str
    difficulty: str
    status: ModerationStatus
    is_published: bool
    author_id: str
    author_username: str
    rating: Decimal
    review_count: int
    created_at: datetime


class ListRecipesResponse(BaseModel):
    """List recipes response."""

    recipes: list[RecipeSummary]
    total: int
    status: str
    search: Optional[str]
    author: Optional[str]
    limit: int
    offset: int


class ListRecipesUseCase(BaseUseCase):
    """Use case for browsing every recipe regardless of status, newest first."""

    def __init__(self, user_service: UserService, recipe_service: RecipeService) -> None:
        self.user_service = user_service
        self.recipe_service = recipe_service

    async def execute(self, request: ListRecipesRequest) -> ListRecipesResponse:
        """Execute list recipes flow.

        Blank search and author text are treated as absent.

        Raises:
            InvalidArgumentError: If the status token is unknown
            NotAuthenticatedError: If the actor cannot be resolved
            ForbiddenError: If the actor is below moderator
        """
        status = self._parse_status(request.status)

        await self.user_service.authorize(
            UserId(request.actor_id) if request.actor_id else None,
            Role.MODERATOR,
            "browse recipes",
        )

        criteria = RecipeFilter(
            status=status,
            search=request.search or None,
            author=request.author or None,
        )
        recipes, total = await self.recipe_service.search(
            criteria, limit=request.limit, offset=request.offset
        )

        return ListRecipesResponse(
            recipes=[
                RecipeSummary(
                    recipe_id=str(recipe.id),
                    title=recipe.title,
                    category=recipe.category,
                    difficulty=recipe.difficulty,
                    status=recipe.status,
                    is_published=recipe.is_published,
                    author_id=str(recipe.author_id),
                    author_username=recipe.author_username,
                    rating=recipe.rating,
                    review_count=recipe.review_count,
                    created_at=recipe.created_at,
                )
                for recipe in recipes
            ],
            total=total,
            status=status.value if status else ALL_STATUSES,
            search=criteria.search,
            author=criteria.author,
            limit=request.limit,
            offset=request.offset,
        )

    @staticmethod
    def _parse_status(token: str) -> Optional[ModerationStatus]:
        if token == ALL_STATUSES:
            return None
        try:
            return ModerationStatus(token)
        except ValueError:
            raise InvalidArgumentError(f"Unknown recipe status: {token!r}")
