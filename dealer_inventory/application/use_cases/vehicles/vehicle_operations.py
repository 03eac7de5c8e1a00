"""Vehicle operations: list (cached), get, create, update, soft delete, restore.

Every mutation commits before the tenant's cached vehicle pages are purged.
"""

from __future__ import annotations

import logging

from dealer_inventory.application.dtos.page import Page
from dealer_inventory.application.dtos.vehicle import VehicleCreate, VehicleResult, VehicleUpdate
from dealer_inventory.application.interfaces.repositories import IUnitOfWork, IVehicleRepository
from dealer_inventory.application.interfaces.services import ICacheInvalidator, IListCache
from dealer_inventory.application.services.query_planner import plan_query
from dealer_inventory.core.constants import CACHE_PREFIX_VEHICLE_LIST
from dealer_inventory.domain.exceptions import DuplicateVinException, ResourceNotFoundException
from dealer_inventory.domain.value_objects.query import ListQuery, QueryConfig

logger = logging.getLogger(__name__)

VEHICLE_QUERY_CONFIG = QueryConfig(
    sortable_fields=frozenset({"year", "make", "model", "price", "created_at", "updated_at"}),
    searchable_fields=frozenset({"vin", "make", "model"}),
    sort_aliases={"createdAt": "created_at", "updatedAt": "updated_at"},
)


class VehicleService:
    """Inventory use cases for one dealership's vehicles."""

    def __init__(
        self,
        vehicle_repo: IVehicleRepository,
        uow: IUnitOfWork,
        cache: IListCache | None = None,
        invalidator: ICacheInvalidator | None = None,
        *,
        list_ttl: int = 60,
    ) -> None:
        self.vehicle_repo = vehicle_repo
        self.uow = uow
        self.cache = cache
        self.invalidator = invalidator
        self.list_ttl = list_ttl

    async def _commit_and_purge(self, tenant_id: str) -> None:
        await self.uow.commit()
        if self.invalidator is not None:
            await self.invalidator.purge(tenant_id)

    async def list_vehicles(self, tenant_id: str, params: ListQuery) -> Page:
        """Return one page of vehicles, served from cache when possible.

        Raises:
            InvalidQueryException: Malformed or non-sortable sort parameter.
        """
        plan = plan_query(tenant_id, params, VEHICLE_QUERY_CONFIG)

        async def load() -> dict:
            rows, total = await self.vehicle_repo.list_page(plan)
            return Page.from_results(rows, total, plan.page, plan.limit).to_dict()

        if self.cache is None:
            return Page.from_dict(await load())
        key = self.cache.list_key(CACHE_PREFIX_VEHICLE_LIST, tenant_id, params.cache_params())
        return Page.from_dict(await self.cache.get_or_load(tenant_id, key, load, self.list_ttl))

    async def get_vehicle(
        self, tenant_id: str, vehicle_id: int, *, include_deleted: bool = False
    ) -> VehicleResult:
        """Return vehicle by id if it belongs to tenant; else raise ResourceNotFoundException."""
        vehicle = await self.vehicle_repo.find(vehicle_id, include_deleted=include_deleted)
        if vehicle is None:
            raise ResourceNotFoundException("vehicle", vehicle_id)
        return vehicle

    async def create_vehicle(self, tenant_id: str, data: VehicleCreate) -> VehicleResult:
        """Create a vehicle; VIN must be new to the dealership, tombstoned rows included."""
        if await self.vehicle_repo.find_by_vin(data.vin) is not None:
            raise DuplicateVinException(data.vin)
        created = await self.vehicle_repo.add(data)
        await self._commit_and_purge(tenant_id)
        logger.info("Vehicle %s created for dealership %s", created.id, tenant_id)
        return created

    async def update_vehicle(
        self, tenant_id: str, vehicle_id: int, data: VehicleUpdate
    ) -> VehicleResult:
        """Apply changed fields. An update that changes nothing writes and purges nothing."""
        current = await self.get_vehicle(tenant_id, vehicle_id)
        changes = data.changes_against(current)
        if not changes:
            return current
        updated = await self.vehicle_repo.apply_changes(vehicle_id, changes)
        if updated is None:
            raise ResourceNotFoundException("vehicle", vehicle_id)
        await self._commit_and_purge(tenant_id)
        return updated

    async def delete_vehicle(self, tenant_id: str, vehicle_id: int) -> VehicleResult:
        """Soft delete; raise ResourceNotFoundException if missing or already deleted."""
        deleted = await self.vehicle_repo.soft_delete(vehicle_id)
        if deleted is None:
            raise ResourceNotFoundException("vehicle", vehicle_id)
        await self._commit_and_purge(tenant_id)
        logger.info("Vehicle %s soft-deleted for dealership %s", vehicle_id, tenant_id)
        return deleted

    async def restore_vehicle(self, tenant_id: str, vehicle_id: int) -> VehicleResult:
        """Clear the tombstone. Restoring a live vehicle is a no-op."""
        current = await self.get_vehicle(tenant_id, vehicle_id, include_deleted=True)
        if current.deleted_at is None:
            return current
        restored = await self.vehicle_repo.restore(vehicle_id)
        if restored is None:
            raise ResourceNotFoundException("vehicle", vehicle_id)
        await self._commit_and_purge(tenant_id)
        logger.info("Vehicle %s restored for dealership %s", vehicle_id, tenant_id)
        return restored
