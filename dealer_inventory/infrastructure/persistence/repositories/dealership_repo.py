"""Dealership repository. Dealerships are the tenants; rows are read-only here."""

from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.infrastructure.persistence.models.dealership import Dealership
from dealer_inventory.infrastructure.persistence.repositories.base import BaseRepository


class DealershipRepository(BaseRepository[Dealership]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Dealership)

    async def get_name(self, dealership_id: str) -> str | None:
        """Return the dealership's display name, or None if unknown."""
        orm = await self.get_by_id(dealership_id)  # type: ignore[arg-type]
        return orm.name if orm else None
