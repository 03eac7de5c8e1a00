"""Unit of work over one AsyncSession.

Services call commit() before purging caches so that invalidation never
runs ahead of the write it reflects.
"""

from sqlalchemy.ext.asyncio import AsyncSession


class SqlAlchemyUnitOfWork:
    """Commit/rollback boundary shared by the repositories of one request."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
