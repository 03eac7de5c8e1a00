"""Sale record operations: create, update, get, list (cached).

A record created with, or updated into, status SOLD passes the
exclusivity guard first. Mutations commit before the tenant's cached
sale record pages are purged.
"""

from __future__ import annotations

import logging

from dealer_inventory.application.dtos.page import Page
from dealer_inventory.application.dtos.sale_record import (
    SaleRecordCreate,
    SaleRecordResult,
    SaleRecordUpdate,
)
from dealer_inventory.application.interfaces.repositories import (
    ISaleRecordRepository,
    IUnitOfWork,
    IVehicleRepository,
)
from dealer_inventory.application.interfaces.services import ICacheInvalidator, IListCache
from dealer_inventory.application.services.exclusivity_guard import ExclusivityGuard
from dealer_inventory.application.services.query_planner import plan_query
from dealer_inventory.core.constants import CACHE_PREFIX_SALE_LIST
from dealer_inventory.domain.enums import SaleStatus
from dealer_inventory.domain.exceptions import ResourceNotFoundException
from dealer_inventory.domain.value_objects.query import ListQuery, QueryConfig, eq

logger = logging.getLogger(__name__)

SALE_RECORD_QUERY_CONFIG = QueryConfig(
    sortable_fields=frozenset({"final_price", "sale_date", "created_at", "updated_at"}),
    searchable_fields=frozenset({"buyer_name", "buyer_address"}),
    sort_aliases={
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "saleDate": "sale_date",
        "finalPrice": "final_price",
    },
    deleted_field=None,
)


class SaleRecordService:
    """Bill-of-sale use cases for one dealership."""

    def __init__(
        self,
        sale_record_repo: ISaleRecordRepository,
        vehicle_repo: IVehicleRepository,
        uow: IUnitOfWork,
        cache: IListCache | None = None,
        invalidator: ICacheInvalidator | None = None,
        *,
        guard: ExclusivityGuard | None = None,
        list_ttl: int = 60,
    ) -> None:
        self.sale_record_repo = sale_record_repo
        self.vehicle_repo = vehicle_repo
        self.uow = uow
        self.cache = cache
        self.invalidator = invalidator
        self.guard = guard or ExclusivityGuard(vehicle_repo, sale_record_repo)
        self.list_ttl = list_ttl

    async def _commit_and_purge(self, tenant_id: str) -> None:
        await self.uow.commit()
        if self.invalidator is not None:
            await self.invalidator.purge(tenant_id)

    async def create_sale_record(
        self, tenant_id: str, data: SaleRecordCreate
    ) -> SaleRecordResult:
        """Create a sale record for a live vehicle of the dealership.

        Raises:
            ResourceNotFoundException: Vehicle missing or deleted.
            VehicleAlreadySoldException: status is SOLD and another SOLD record exists.
        """
        if data.status is SaleStatus.SOLD:
            await self.guard.assert_sale_allowed(tenant_id, data.vehicle_id)
        elif await self.vehicle_repo.find(data.vehicle_id) is None:
            raise ResourceNotFoundException("vehicle", data.vehicle_id)
        created = await self.sale_record_repo.add(data)
        await self._commit_and_purge(tenant_id)
        logger.info(
            "Sale record %s (%s) created for vehicle %s in dealership %s",
            created.id,
            created.status.value,
            created.vehicle_id,
            tenant_id,
        )
        return created

    async def get_sale_record(self, tenant_id: str, record_id: int) -> SaleRecordResult:
        """Return sale record by id if it belongs to tenant; else raise ResourceNotFoundException."""
        record = await self.sale_record_repo.find(record_id)
        if record is None:
            raise ResourceNotFoundException("sale_record", record_id)
        return record

    async def update_sale_record(
        self, tenant_id: str, record_id: int, data: SaleRecordUpdate
    ) -> SaleRecordResult:
        """Apply changed fields; a transition into SOLD is guarded.

        An update that changes nothing writes and purges nothing and returns
        the record unchanged.
        """
        current = await self.get_sale_record(tenant_id, record_id)
        changes = data.changes_against(current)
        if not changes:
            return current
        if changes.get("status") is SaleStatus.SOLD:
            await self.guard.assert_sale_allowed(
                tenant_id, current.vehicle_id, excluding_record_id=record_id
            )
        updated = await self.sale_record_repo.apply_changes(record_id, changes)
        if updated is None:
            raise ResourceNotFoundException("sale_record", record_id)
        await self._commit_and_purge(tenant_id)
        return updated

    async def list_sale_records(
        self,
        tenant_id: str,
        params: ListQuery,
        vehicle_id: int | None = None,
    ) -> Page:
        """Return one page of sale records, optionally for a single vehicle.

        Raises:
            InvalidQueryException: Malformed or non-sortable sort parameter.
            ResourceNotFoundException: vehicle_id given but not in the dealership.
        """
        base = None
        cache_params = params.cache_params()
        if vehicle_id is not None:
            if await self.vehicle_repo.find(vehicle_id, include_deleted=True) is None:
                raise ResourceNotFoundException("vehicle", vehicle_id)
            base = eq("vehicle_id", vehicle_id)
            cache_params["vehicle_id"] = vehicle_id
        plan = plan_query(tenant_id, params, SALE_RECORD_QUERY_CONFIG, base=base)

        async def load() -> dict:
            rows, total = await self.sale_record_repo.list_page(plan)
            return Page.from_results(rows, total, plan.page, plan.limit).to_dict()

        if self.cache is None:
            return Page.from_dict(await load())
        key = self.cache.list_key(CACHE_PREFIX_SALE_LIST, tenant_id, cache_params)
        return Page.from_dict(await self.cache.get_or_load(tenant_id, key, load, self.list_ttl))
