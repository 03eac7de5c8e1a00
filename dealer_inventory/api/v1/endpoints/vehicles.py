"""Vehicle API: thin routes delegating to VehicleService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from dealer_inventory.api.v1.dependencies import (
    get_sale_record_service,
    get_tenant_id,
    get_vehicle_service,
)
from dealer_inventory.application.dtos.vehicle import VehicleCreate, VehicleUpdate
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.application.use_cases.vehicles import VehicleService
from dealer_inventory.core.limiter import limit_writes
from dealer_inventory.domain.value_objects.query import ListQuery
from dealer_inventory.schemas.common import PageResponse, list_query_params
from dealer_inventory.schemas.sale_record import SaleRecordResponse
from dealer_inventory.schemas.vehicle import (
    VehicleCreateRequest,
    VehicleResponse,
    VehicleUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=PageResponse[VehicleResponse])
async def list_vehicles(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    params: Annotated[ListQuery, Depends(list_query_params)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
):
    """List the dealership's vehicles (paged, sortable, searchable by VIN/make/model)."""
    page = await vehicle_svc.list_vehicles(tenant_id, params)
    return PageResponse[VehicleResponse].from_page(page)


@router.post("", response_model=VehicleResponse, status_code=201)
@limit_writes
async def create_vehicle(
    request: Request,
    body: VehicleCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
):
    """Add a vehicle to the dealership's inventory. 409 if the VIN already exists."""
    created = await vehicle_svc.create_vehicle(
        tenant_id, VehicleCreate(**body.model_dump())
    )
    return VehicleResponse.model_validate(created)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: int,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
    include_deleted: Annotated[bool, Query(alias="includeDeleted")] = False,
):
    """Get a vehicle by id (404 if not in this dealership)."""
    vehicle = await vehicle_svc.get_vehicle(
        tenant_id, vehicle_id, include_deleted=include_deleted
    )
    return VehicleResponse.model_validate(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleResponse)
@limit_writes
async def update_vehicle(
    request: Request,
    vehicle_id: int,
    body: VehicleUpdateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
):
    """Update price, status or image URL."""
    updated = await vehicle_svc.update_vehicle(
        tenant_id, vehicle_id, VehicleUpdate(**body.model_dump(exclude_unset=True))
    )
    return VehicleResponse.model_validate(updated)


@router.delete("/{vehicle_id}", status_code=204)
@limit_writes
async def delete_vehicle(
    request: Request,
    vehicle_id: int,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
) -> Response:
    """Soft delete a vehicle (restorable)."""
    await vehicle_svc.delete_vehicle(tenant_id, vehicle_id)
    return Response(status_code=204)


@router.post("/{vehicle_id}/restore", response_model=VehicleResponse)
@limit_writes
async def restore_vehicle(
    request: Request,
    vehicle_id: int,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    vehicle_svc: Annotated[VehicleService, Depends(get_vehicle_service)],
):
    """Restore a soft-deleted vehicle."""
    restored = await vehicle_svc.restore_vehicle(tenant_id, vehicle_id)
    return VehicleResponse.model_validate(restored)


@router.get("/{vehicle_id}/sale-records", response_model=PageResponse[SaleRecordResponse])
async def list_vehicle_sale_records(
    vehicle_id: int,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    params: Annotated[ListQuery, Depends(list_query_params)],
    sale_record_svc: Annotated[SaleRecordService, Depends(get_sale_record_service)],
):
    """List sale records of one vehicle."""
    page = await sale_record_svc.list_sale_records(tenant_id, params, vehicle_id=vehicle_id)
    return PageResponse[SaleRecordResponse].from_page(page)
