"""Sale record API: thin routes delegating to SaleRecordService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from dealer_inventory.api.v1.dependencies import get_sale_record_service, get_tenant_id
from dealer_inventory.application.dtos.sale_record import SaleRecordCreate, SaleRecordUpdate
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.core.limiter import limit_writes
from dealer_inventory.domain.value_objects.query import ListQuery
from dealer_inventory.schemas.common import PageResponse, list_query_params
from dealer_inventory.schemas.sale_record import (
    SaleRecordCreateRequest,
    SaleRecordResponse,
    SaleRecordUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=PageResponse[SaleRecordResponse])
async def list_sale_records(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    params: Annotated[ListQuery, Depends(list_query_params)],
    sale_record_svc: Annotated[SaleRecordService, Depends(get_sale_record_service)],
    vehicle_id: Annotated[int | None, Query(alias="vehicleId", gt=0)] = None,
):
    """List the dealership's sale records (searchable by buyer name/address)."""
    page = await sale_record_svc.list_sale_records(tenant_id, params, vehicle_id=vehicle_id)
    return PageResponse[SaleRecordResponse].from_page(page)


@router.post("", response_model=SaleRecordResponse, status_code=201)
@limit_writes
async def create_sale_record(
    request: Request,
    body: SaleRecordCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    sale_record_svc: Annotated[SaleRecordService, Depends(get_sale_record_service)],
):
    """Record a sale. 409 if the vehicle already has a SOLD record."""
    created = await sale_record_svc.create_sale_record(
        tenant_id, SaleRecordCreate(**body.model_dump())
    )
    return SaleRecordResponse.model_validate(created)


@router.get("/{record_id}", response_model=SaleRecordResponse)
async def get_sale_record(
    record_id: int,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    sale_record_svc: Annotated[SaleRecordService, Depends(get_sale_record_service)],
):
    """Get a sale record by id (404 if not in this dealership)."""
    record = await sale_record_svc.get_sale_record(tenant_id, record_id)
    return SaleRecordResponse.model_validate(record)


@router.patch("/{record_id}", response_model=SaleRecordResponse)
@limit_writes
async def update_sale_record(
    request: Request,
    record_id: int,
    body: SaleRecordUpdateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    sale_record_svc: Annotated[SaleRecordService, Depends(get_sale_record_service)],
):
    """Update price, buyer details or status. Moving to SOLD is checked for exclusivity."""
    updated = await sale_record_svc.update_sale_record(
        tenant_id, record_id, SaleRecordUpdate(**body.model_dump(exclude_unset=True))
    )
    return SaleRecordResponse.model_validate(updated)
