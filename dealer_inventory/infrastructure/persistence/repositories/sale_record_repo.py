"""Sale record repository. Returns application DTOs. Dealership-scoped."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.application.dtos.sale_record import SaleRecordCreate, SaleRecordResult
from dealer_inventory.domain.enums import SaleStatus
from dealer_inventory.domain.exceptions import VehicleAlreadySoldException
from dealer_inventory.domain.value_objects.query import QueryPlan
from dealer_inventory.infrastructure.persistence.models.sale_record import (
    SOLD_UNIQUE_INDEX,
    SaleRecord,
)
from dealer_inventory.infrastructure.persistence.repositories.base import (
    TenantScopedRepository,
    violates_constraint,
)
from dealer_inventory.shared.utils.datetime import ensure_utc


def _sale_record_to_result(r: SaleRecord) -> SaleRecordResult:
    """Map ORM SaleRecord to application SaleRecordResult."""
    return SaleRecordResult(
        id=r.id,
        dealership_id=r.dealership_id,
        vehicle_id=r.vehicle_id,
        final_price=r.final_price,
        buyer_name=r.buyer_name,
        buyer_address=r.buyer_address,
        sale_date=r.sale_date,
        status=r.status,
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


class SaleRecordRepository(TenantScopedRepository[SaleRecord]):
    """Sale record repository. All access scoped to one dealership.

    Writes that would create a second SOLD record for a vehicle are rejected
    by the partial unique index and surface as VehicleAlreadySoldException.
    """

    def __init__(self, db: AsyncSession, dealership_id: str) -> None:
        super().__init__(db, SaleRecord, dealership_id)

    async def find(self, record_id: int) -> SaleRecordResult | None:
        orm = await self.get_by_id(record_id)
        return _sale_record_to_result(orm) if orm else None

    async def find_other_sold(
        self, vehicle_id: int, excluding_id: int | None = None
    ) -> SaleRecordResult | None:
        """Return a SOLD record for the vehicle other than excluding_id, if any."""
        stmt = select(SaleRecord).where(
            SaleRecord.dealership_id == self._dealership_id,
            SaleRecord.vehicle_id == vehicle_id,
            SaleRecord.status == SaleStatus.SOLD,
        )
        if excluding_id is not None:
            stmt = stmt.where(SaleRecord.id != excluding_id)
        result = await self.db.execute(stmt.limit(1))
        orm = result.scalars().first()
        return _sale_record_to_result(orm) if orm else None

    async def list_page(self, plan: QueryPlan) -> tuple[list[SaleRecordResult], int]:
        rows, total = await self.find_page(plan)
        return [_sale_record_to_result(r) for r in rows], total

    async def add(self, data: SaleRecordCreate) -> SaleRecordResult:
        orm = SaleRecord(
            dealership_id=self._dealership_id,
            vehicle_id=data.vehicle_id,
            final_price=data.final_price,
            buyer_name=data.buyer_name,
            buyer_address=data.buyer_address,
            status=data.status,
        )
        if data.sale_date is not None:
            orm.sale_date = ensure_utc(data.sale_date)
        try:
            created = await self.create(orm)
        except IntegrityError as e:
            if violates_constraint(e, SOLD_UNIQUE_INDEX, "sale_record.vehicle_id"):
                raise VehicleAlreadySoldException(data.vehicle_id) from e
            raise
        return _sale_record_to_result(created)

    async def apply_changes(
        self, record_id: int, changes: dict[str, Any]
    ) -> SaleRecordResult | None:
        """Set the given fields on a record; None if it does not exist."""
        orm = await self.get_by_id(record_id)
        if orm is None:
            return None
        for name, value in changes.items():
            setattr(orm, name, value)
        try:
            saved = await self.save(orm)
        except IntegrityError as e:
            if violates_constraint(e, SOLD_UNIQUE_INDEX, "sale_record.vehicle_id"):
                raise VehicleAlreadySoldException(orm.vehicle_id) from e
            raise
        return _sale_record_to_result(saved)
