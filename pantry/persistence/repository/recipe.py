"""PostgreSQL implementation of Recipe repository."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import logfire
from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.model import Recipe
from pantry.domain.repository import RecipeRepository
from pantry.domain.value import (
    ModerationStatus,
    RecipeAggregate,
    RecipeFilter,
    RecipeId,
)
from pantry.persistence.mappers import recipe_to_dict, row_to_recipe
from pantry.persistence.tables import recipes_table


class PostgresRecipeRepository(RecipeRepository):
    """PostgreSQL implementation of RecipeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, recipe_id: RecipeId) -> Optional[Recipe]:
        """Find a recipe by ID."""
        stmt = select(recipes_table).where(recipes_table.c.id == recipe_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_recipe(dict(row)) if row else None

    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes in a moderation status, oldest first."""
        with logfire.span(
            "recipe_repository.find_by_status",
            status=status.value,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(recipes_table)
                .where(recipes_table.c.status == status.value)
                .order_by(recipes_table.c.created_at.asc())
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_recipe(dict(row)) for row in result.mappings().all()]

    def _matching(self, criteria: RecipeFilter) -> list:
        conditions = []
        if criteria.status is not None:
            conditions.append(recipes_table.c.status == criteria.status.value)
        if criteria.search:
            conditions.append(
                or_(
                    recipes_table.c.title.icontains(criteria.search, autoescape=True),
                    recipes_table.c.description.icontains(
                        criteria.search, autoescape=True
                    ),
                )
            )
        if criteria.author:
            conditions.append(
                recipes_table.c.author_username.icontains(
                    criteria.author, autoescape=True
                )
            )
        return conditions

    async def find_matching(
        self,
        criteria: RecipeFilter,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Recipe]:
        """Find recipes matching a filter, newest first."""
        with logfire.span(
            "recipe_repository.find_matching",
            status=criteria.status.value if criteria.status else "all",
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(recipes_table)
                .where(*self._matching(criteria))
                .order_by(recipes_table.c.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_recipe(dict(row)) for row in result.mappings().all()]

    async def count_matching(self, criteria: RecipeFilter) -> int:
        """Count recipes matching a filter."""
        stmt = (
            select(func.count())
            .select_from(recipes_table)
            .where(*self._matching(criteria))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, recipe: Recipe) -> Recipe:
        """Save a recipe (create or update)."""
        existing = await self.find_by_id(recipe.id)

        if existing:
            # Derived fields are only written by update_aggregate
            recipe_dict = recipe_to_dict(recipe)
            for derived in ("rating", "review_count"):
                recipe_dict.pop(derived)
            stmt = (
                recipes_table.update()
                .where(recipes_table.c.id == recipe.id)
                .values(**recipe_dict)
            )
        else:
            stmt = recipes_table.insert().values(**recipe_to_dict(recipe))

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(recipe.id) or recipe

    async def delete(self, recipe_id: RecipeId) -> bool:
        """Delete a recipe row (hard delete)."""
        stmt = recipes_table.delete().where(recipes_table.c.id == recipe_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    @asynccontextmanager
    async def lock(self, recipe_id: RecipeId) -> AsyncIterator[None]:
        """Take a row lock on the recipe for the rest of the transaction."""
        stmt = (
            select(recipes_table.c.id)
            .where(recipes_table.c.id == recipe_id)
            .with_for_update()
        )
        await self.session.execute(stmt)
        yield

    async def update_aggregate(
        self, recipe_id: RecipeId, aggregate: RecipeAggregate
    ) -> Optional[Recipe]:
        """Write the derived rating fields of a recipe."""
        stmt = (
            update(recipes_table)
            .where(recipes_table.c.id == recipe_id)
            .values(rating=aggregate.rating, review_count=aggregate.review_count)
            .returning(recipes_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_recipe(dict(row)) if row else None

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count recipes per moderation status."""
        stmt = select(recipes_table.c.status, func.count()).group_by(
            recipes_table.c.status
        )
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in ModerationStatus}
        for status, count in result.all():
            counts[ModerationStatus(status)] = count
        return counts

    async def count_published(self) -> int:
        """Count published recipes."""
        stmt = (
            select(func.count())
            .select_from(recipes_table)
            .where(recipes_table.c.is_published.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
