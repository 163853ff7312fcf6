"""Recipe domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from pantry.domain.error import NotFoundError
from pantry.domain.model import Recipe, User
from pantry.domain.repository import RecipeRepository
from pantry.domain.value import ModerationStatus, RecipeFilter, RecipeId

from .base import Service
from .moderation_state import ModerationStateMachine


class RecipeService(Service):
    """Domain service for recipe operations."""

    def __init__(self, recipe_repository: RecipeRepository) -> None:
        """Initialize recipe service.

        Args:
            recipe_repository: Recipe repository
        """
        self.recipe_repository = recipe_repository

    async def create_recipe(
        self,
        author: User,
        title: str,
        category: str,
        difficulty: str,
        description: Optional[str] = None,
        prep_time_minutes: int = 0,
        cook_time_minutes: int = 0,
        servings: int = 1,
        image_url: Optional[str] = None,
        ingredients: Optional[list[str]] = None,
        instructions: Optional[list[str]] = None,
        tags: Optional[list[str]] = None,
    ) -> Recipe:
        """Create a recipe awaiting review.

        Returns:
            Created recipe, always pending and unpublished
        """
        with logfire.span(
            "recipe_service.create_recipe",
            author_id=str(author.id),
            title=title,
        ):
            state = ModerationStateMachine.initial_recipe_state()
            now = datetime.now()
            recipe = Recipe(
                id=RecipeId(uuid4()),
                author_id=author.id,
                author_username=author.username,
                title=title,
                description=description,
                category=category,
                difficulty=difficulty,
                prep_time_minutes=prep_time_minutes,
                cook_time_minutes=cook_time_minutes,
                servings=servings,
                image_url=image_url,
                ingredients=ingredients or [],
                instructions=instructions or [],
                tags=tags or [],
                status=state.status,
                is_published=state.is_published,
                created_at=now,
                updated_at=now,
            )
            saved = await self.recipe_repository.save(recipe)
            logfire.info(
                "Recipe submitted",
                recipe_id=str(saved.id),
                author_id=str(author.id),
            )
            return saved

    async def get_recipe_by_id(self, recipe_id: RecipeId) -> Recipe | None:
        """Get a recipe by ID.

        Args:
            recipe_id: Recipe ID

        Returns:
            Recipe if found, None otherwise
        """
        with logfire.span("recipe_service.get_recipe_by_id", recipe_id=str(recipe_id)):
            recipe = await self.recipe_repository.find_by_id(recipe_id)
            if not recipe:
                logfire.warn("Recipe not found", recipe_id=str(recipe_id))
            return recipe

    async def require_recipe(self, recipe_id: RecipeId) -> Recipe:
        """Get a recipe by ID or fail.

        Raises:
            NotFoundError: If the recipe does not exist
        """
        recipe = await self.get_recipe_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", str(recipe_id))
        return recipe

    async def save(self, recipe: Recipe) -> Recipe:
        """Persist a recipe after a transition."""
        with logfire.span(
            "recipe_service.save",
            recipe_id=str(recipe.id),
            status=recipe.status.value,
            is_published=recipe.is_published,
        ):
            return await self.recipe_repository.save(recipe)

    async def delete_recipe(self, recipe_id: RecipeId) -> bool:
        """Delete the recipe row and confirm it is gone.

        Args:
            recipe_id: Recipe ID

        Returns:
            True if a re-read no longer finds the recipe
        """
        with logfire.span("recipe_service.delete_recipe", recipe_id=str(recipe_id)):
            deleted = await self.recipe_repository.delete(recipe_id)
            still_there = await self.recipe_repository.find_by_id(recipe_id)
            if still_there is not None:
                logfire.error(
                    "Recipe still present after delete",
                    recipe_id=str(recipe_id),
                    delete_reported=deleted,
                )
                return False
            logfire.info("Recipe deleted", recipe_id=str(recipe_id))
            return True

    async def list_by_status(
        self, status: ModerationStatus, limit: int = 50, offset: int = 0
    ) -> list[Recipe]:
        """List recipes in a moderation status, oldest first."""
        with logfire.span(
            "recipe_service.list_by_status",
            status=status.value,
            limit=limit,
            offset=offset,
        ):
            return await self.recipe_repository.find_by_status(
                status, limit=limit, offset=offset
            )

    async def search(
        self, criteria: RecipeFilter, limit: int = 20, offset: int = 0
    ) -> tuple[list[Recipe], int]:
        """List recipes matching a filter, newest first, with the total."""
        with logfire.span(
            "recipe_service.search",
            status=criteria.status.value if criteria.status else "all",
            limit=limit,
            offset=offset,
        ):
            recipes = await self.recipe_repository.find_matching(
                criteria, limit=limit, offset=offset
            )
            total = await self.recipe_repository.count_matching(criteria)
            return recipes, total

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count recipes per moderation status."""
        return await self.recipe_repository.count_by_status()

    async def count_published(self) -> int:
        """Count published recipes."""
        return await self.recipe_repository.count_published()
