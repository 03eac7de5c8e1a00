"""Vehicle repository. Returns application DTOs. Dealership-scoped."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.application.dtos.vehicle import VehicleCreate, VehicleResult
from dealer_inventory.domain.exceptions import DuplicateVinException
from dealer_inventory.domain.value_objects.query import QueryPlan
from dealer_inventory.infrastructure.persistence.models.vehicle import Vehicle
from dealer_inventory.infrastructure.persistence.repositories.base import (
    TenantScopedRepository,
    violates_constraint,
)
from dealer_inventory.shared.utils.datetime import utc_now

VIN_UNIQUE_CONSTRAINT = "uq_vehicle_dealership_vin"


def _vehicle_to_result(v: Vehicle) -> VehicleResult:
    """Map ORM Vehicle to application VehicleResult."""
    return VehicleResult(
        id=v.id,
        dealership_id=v.dealership_id,
        vin=v.vin,
        year=v.year,
        make=v.make,
        model=v.model,
        price=v.price,
        status=v.status,
        image_url=v.image_url,
        created_at=v.created_at,
        updated_at=v.updated_at,
        deleted_at=v.deleted_at,
    )


class VehicleRepository(TenantScopedRepository[Vehicle]):
    """Vehicle repository. All access scoped to one dealership."""

    def __init__(self, db: AsyncSession, dealership_id: str) -> None:
        super().__init__(db, Vehicle, dealership_id)

    async def _get_entity(self, vehicle_id: int, *, include_deleted: bool) -> Vehicle | None:
        orm = await super().get_by_id(vehicle_id)
        if orm is None or (orm.deleted_at is not None and not include_deleted):
            return None
        return orm

    async def find(self, vehicle_id: int, *, include_deleted: bool = False) -> VehicleResult | None:
        """Return a vehicle by id; tombstoned rows only when include_deleted."""
        orm = await self._get_entity(vehicle_id, include_deleted=include_deleted)
        return _vehicle_to_result(orm) if orm else None

    async def find_by_vin(self, vin: str) -> VehicleResult | None:
        """Return the vehicle with this VIN, soft-deleted rows included."""
        result = await self.db.execute(
            select(Vehicle).where(
                Vehicle.dealership_id == self._dealership_id,
                Vehicle.vin == vin,
            )
        )
        orm = result.scalar_one_or_none()
        return _vehicle_to_result(orm) if orm else None

    async def lock(self, vehicle_id: int) -> VehicleResult | None:
        """SELECT ... FOR UPDATE on a live vehicle row.

        Serializes concurrent sale-record writes for the same vehicle until
        the surrounding transaction ends.
        """
        result = await self.db.execute(
            select(Vehicle)
            .where(
                Vehicle.id == vehicle_id,
                Vehicle.dealership_id == self._dealership_id,
                Vehicle.deleted_at.is_(None),
            )
            .with_for_update()
        )
        orm = result.scalar_one_or_none()
        return _vehicle_to_result(orm) if orm else None

    async def list_page(self, plan: QueryPlan) -> tuple[list[VehicleResult], int]:
        rows, total = await self.find_page(plan)
        return [_vehicle_to_result(v) for v in rows], total

    async def list_live(self) -> list[VehicleResult]:
        """All non-deleted vehicles of the dealership, oldest first."""
        result = await self.db.execute(
            select(Vehicle)
            .where(
                Vehicle.dealership_id == self._dealership_id,
                Vehicle.deleted_at.is_(None),
            )
            .order_by(Vehicle.created_at.asc(), Vehicle.id.asc())
        )
        return [_vehicle_to_result(v) for v in result.scalars().all()]

    async def add(self, data: VehicleCreate) -> VehicleResult:
        """Insert a vehicle. Raises DuplicateVinException on a VIN collision."""
        orm = Vehicle(
            dealership_id=self._dealership_id,
            vin=data.vin,
            year=data.year,
            make=data.make,
            model=data.model,
            price=data.price,
            status=data.status,
        )
        try:
            created = await self.create(orm)
        except IntegrityError as e:
            if violates_constraint(e, VIN_UNIQUE_CONSTRAINT, "vehicle.vin"):
                raise DuplicateVinException(data.vin) from e
            raise
        return _vehicle_to_result(created)

    async def apply_changes(
        self, vehicle_id: int, changes: dict[str, Any]
    ) -> VehicleResult | None:
        """Set the given fields on a live vehicle; None if it does not exist."""
        orm = await self._get_entity(vehicle_id, include_deleted=False)
        if orm is None:
            return None
        for name, value in changes.items():
            setattr(orm, name, value)
        return _vehicle_to_result(await self.save(orm))

    async def soft_delete(self, vehicle_id: int) -> VehicleResult | None:
        """Tombstone a live vehicle; None if missing or already deleted."""
        orm = await self._get_entity(vehicle_id, include_deleted=False)
        if orm is None:
            return None
        orm.deleted_at = utc_now()
        return _vehicle_to_result(await self.save(orm))

    async def restore(self, vehicle_id: int) -> VehicleResult | None:
        """Clear the tombstone; None if the vehicle does not exist."""
        orm = await self._get_entity(vehicle_id, include_deleted=True)
        if orm is None:
            return None
        if orm.deleted_at is not None:
            orm.deleted_at = None
            orm = await self.save(orm)
        return _vehicle_to_result(orm)
