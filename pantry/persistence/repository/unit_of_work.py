"""PostgreSQL unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work backed by the request's database transaction.

    Every repository in a request shares the same session, so committing
    or rolling back here covers all of their writes.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def begin(self) -> None:
        if not self.session.in_transaction():
            await self.session.begin()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
