"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.model import Comment
from pantry.domain.repository import CommentRepository
from pantry.domain.value import CommentId, ModerationStatus, RecipeId
from pantry.persistence.mappers import comment_to_dict, row_to_comment
from pantry.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find_by_status(
        self,
        status: ModerationStatus,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments in a moderation status, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.status == status.value)
            .order_by(comments_table.c.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def find_flagged(self, limit: int = 50, offset: int = 0) -> List[Comment]:
        """Find flagged comments, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.is_flagged.is_(True))
            .order_by(comments_table.c.flagged_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)

        comment_dict = comment_to_dict(comment)
        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def delete_by_recipe(self, recipe_id: RecipeId) -> int:
        """Delete every comment on a recipe."""
        stmt = comments_table.delete().where(comments_table.c.recipe_id == recipe_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_recipe(self, recipe_id: RecipeId) -> int:
        """Count comments on a recipe."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.recipe_id == recipe_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_status(self) -> dict[ModerationStatus, int]:
        """Count comments per moderation status."""
        stmt = select(comments_table.c.status, func.count()).group_by(
            comments_table.c.status
        )
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in ModerationStatus}
        for status, count in result.all():
            counts[ModerationStatus(status)] = count
        return counts

    async def count_flagged(self) -> int:
        """Count flagged comments."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.is_flagged.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
