"""PostgreSQL implementation of Rating repository."""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.model import Rating
from pantry.domain.repository import RatingRepository
from pantry.domain.value import RatingSummary, RecipeId, UserId
from pantry.persistence.mappers import rating_to_dict, row_to_rating
from pantry.persistence.tables import ratings_table


class PostgresRatingRepository(RatingRepository):
    """PostgreSQL implementation of RatingRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_recipe(
        self, user_id: UserId, recipe_id: RecipeId
    ) -> Optional[Rating]:
        """Find a user's rating of a recipe."""
        stmt = select(ratings_table).where(
            and_(
                ratings_table.c.user_id == user_id,
                ratings_table.c.recipe_id == recipe_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_rating(dict(row)) if row else None

    async def upsert(self, rating: Rating) -> Rating:
        """Insert a rating, or replace the value of the existing one."""
        stmt = insert(ratings_table).values(**rating_to_dict(rating))
        stmt = stmt.on_conflict_do_update(
            constraint="uq_rating_recipe_user",
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(ratings_table)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_rating(dict(row))

    async def summarize_recipe(self, recipe_id: RecipeId) -> RatingSummary:
        """Count and sum the stored ratings of a recipe."""
        stmt = select(
            func.count(ratings_table.c.id),
            func.coalesce(func.sum(ratings_table.c.value), 0),
        ).where(ratings_table.c.recipe_id == recipe_id)
        result = await self.session.execute(stmt)
        count, total = result.one()
        return RatingSummary(count=count, total=int(total))

    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every rating of a recipe."""
        stmt = ratings_table.delete().where(ratings_table.c.recipe_id == recipe_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count ratings of a recipe."""
        stmt = (
            select(func.count())
            .select_from(ratings_table)
            .where(ratings_table.c.recipe_id == recipe_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
