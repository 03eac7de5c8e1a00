"""Use-case dependencies (composition root).

Repositories are scoped to the request's dealership; services receive the
process-wide cache and invalidators, never look them up themselves.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.api.v1.dependencies.auth import get_tenant_id
from dealer_inventory.api.v1.dependencies.cache import get_cache_registry
from dealer_inventory.api.v1.dependencies.db import get_db, get_db_for_write, get_uow
from dealer_inventory.application.dtos.marketing import ExportResult
from dealer_inventory.application.use_cases.marketing import MarketingSyncProcessor
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.application.use_cases.vehicles import VehicleService
from dealer_inventory.core.config import get_settings
from dealer_inventory.core.constants import CACHE_PREFIX_SALE_LIST, CACHE_PREFIX_VEHICLE_LIST
from dealer_inventory.core.sync_job_store import SyncJobStore
from dealer_inventory.infrastructure.cache.registry import CacheRegistry
from dealer_inventory.infrastructure.export import JsonExportWriter
from dealer_inventory.infrastructure.persistence.repositories import (
    DealershipRepository,
    SaleRecordRepository,
    VehicleRepository,
)
from dealer_inventory.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


async def get_vehicle_repo(
    db: Annotated[AsyncSession, Depends(get_db_for_write)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
) -> VehicleRepository:
    return VehicleRepository(db, tenant_id)


async def get_sale_record_repo(
    db: Annotated[AsyncSession, Depends(get_db_for_write)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
) -> SaleRecordRepository:
    return SaleRecordRepository(db, tenant_id)


async def get_vehicle_service(
    vehicle_repo: Annotated[VehicleRepository, Depends(get_vehicle_repo)],
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_uow)],
    registry: Annotated[CacheRegistry | None, Depends(get_cache_registry)],
) -> VehicleService:
    """Vehicle use cases with the shared list cache and vehicle invalidator."""
    return VehicleService(
        vehicle_repo,
        uow,
        cache=registry.cache if registry else None,
        invalidator=registry.invalidator(CACHE_PREFIX_VEHICLE_LIST) if registry else None,
        list_ttl=get_settings().cache_ttl_vehicle_list,
    )


async def get_sale_record_service(
    sale_record_repo: Annotated[SaleRecordRepository, Depends(get_sale_record_repo)],
    vehicle_repo: Annotated[VehicleRepository, Depends(get_vehicle_repo)],
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_uow)],
    registry: Annotated[CacheRegistry | None, Depends(get_cache_registry)],
) -> SaleRecordService:
    """Sale record use cases with the shared list cache and sale record invalidator."""
    return SaleRecordService(
        sale_record_repo,
        vehicle_repo,
        uow,
        cache=registry.cache if registry else None,
        invalidator=registry.invalidator(CACHE_PREFIX_SALE_LIST) if registry else None,
        list_ttl=get_settings().cache_ttl_sale_list,
    )


def get_sync_job_store(request: Request) -> SyncJobStore:
    """Sync job store from app.state; 503 if startup did not create it."""
    store = getattr(request.app.state, "sync_job_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Sync job store unavailable")
    return store


def get_marketing_sync_runner() -> Callable[[str, str], Awaitable[ExportResult]]:
    """Return a callable that runs one export with a fresh session (for background jobs)."""

    async def run_marketing_sync(tenant_id: str, message: str) -> ExportResult:
        gen = get_db()
        try:
            session = await gen.__anext__()
        except StopAsyncIteration:
            await gen.aclose()
            raise RuntimeError("Failed to obtain database session")
        try:
            processor = MarketingSyncProcessor(
                DealershipRepository(session),
                VehicleRepository(session, tenant_id),
                JsonExportWriter(get_settings().export_dir),
            )
            return await processor.process(tenant_id, message)
        finally:
            await gen.aclose()

    return run_marketing_sync
