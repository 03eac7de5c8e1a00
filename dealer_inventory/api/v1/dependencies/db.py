"""DB session and unit-of-work dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.infrastructure.persistence.database import get_db, get_db_for_write
from dealer_inventory.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["get_db", "get_db_for_write", "get_uow"]


async def get_uow(
    db: Annotated[AsyncSession, Depends(get_db_for_write)],
) -> SqlAlchemyUnitOfWork:
    """Unit of work over the request's write session."""
    return SqlAlchemyUnitOfWork(db)
