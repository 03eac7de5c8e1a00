"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain values only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from dealer_inventory.application.dtos.sale_record import SaleRecordCreate, SaleRecordResult
    from dealer_inventory.application.dtos.vehicle import VehicleCreate, VehicleResult
    from dealer_inventory.domain.value_objects.query import QueryPlan


# Vehicle repository interface
class IVehicleRepository(Protocol):
    """Protocol for vehicle repository (DIP). Scoped to one dealership."""

    async def find(self, vehicle_id: int, *, include_deleted: bool = False) -> VehicleResult | None:
        """Return a vehicle by id; tombstoned rows only when include_deleted."""

    async def find_by_vin(self, vin: str) -> VehicleResult | None:
        """Return the vehicle with this VIN, soft-deleted rows included."""

    async def lock(self, vehicle_id: int) -> VehicleResult | None:
        """Lock a live vehicle row for the rest of the transaction."""

    async def list_page(self, plan: QueryPlan) -> tuple[list[VehicleResult], int]:
        """Return one page of vehicles and the total count for the plan."""

    async def list_live(self) -> list[VehicleResult]:
        """Return all non-deleted vehicles."""

    async def add(self, data: VehicleCreate) -> VehicleResult:
        """Insert a vehicle."""

    async def apply_changes(self, vehicle_id: int, changes: dict[str, Any]) -> VehicleResult | None:
        """Update fields of a live vehicle."""

    async def soft_delete(self, vehicle_id: int) -> VehicleResult | None:
        """Tombstone a live vehicle."""

    async def restore(self, vehicle_id: int) -> VehicleResult | None:
        """Clear a vehicle's tombstone."""


# Sale record repository interface
class ISaleRecordRepository(Protocol):
    """Protocol for sale record repository (DIP). Scoped to one dealership."""

    async def find(self, record_id: int) -> SaleRecordResult | None:
        """Return a sale record by id."""

    async def find_other_sold(
        self, vehicle_id: int, excluding_id: int | None = None
    ) -> SaleRecordResult | None:
        """Return a SOLD record for the vehicle other than excluding_id."""

    async def list_page(self, plan: QueryPlan) -> tuple[list[SaleRecordResult], int]:
        """Return one page of sale records and the total count for the plan."""

    async def add(self, data: SaleRecordCreate) -> SaleRecordResult:
        """Insert a sale record."""

    async def apply_changes(
        self, record_id: int, changes: dict[str, Any]
    ) -> SaleRecordResult | None:
        """Update fields of a sale record."""


# Dealership repository interface
class IDealershipRepository(Protocol):
    """Protocol for dealership lookups (DIP)."""

    async def get_name(self, dealership_id: str) -> str | None:
        """Return the dealership's display name."""


# Unit of work interface
class IUnitOfWork(Protocol):
    """Transaction boundary shared by the repositories of one request."""

    async def commit(self) -> None:
        """Commit the current transaction."""

    async def rollback(self) -> None:
        """Roll back the current transaction."""
