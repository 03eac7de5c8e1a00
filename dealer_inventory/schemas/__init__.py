"""Pydantic request/response schemas for the API."""

from dealer_inventory.schemas.common import PageResponse, list_query_params
from dealer_inventory.schemas.health import HealthResponse, ReadinessResponse
from dealer_inventory.schemas.marketing import (
    SyncJobStartedResponse,
    SyncJobStatusResponse,
    SyncTriggerRequest,
)
from dealer_inventory.schemas.sale_record import (
    SaleRecordCreateRequest,
    SaleRecordResponse,
    SaleRecordUpdateRequest,
)
from dealer_inventory.schemas.vehicle import (
    VehicleCreateRequest,
    VehicleResponse,
    VehicleUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "PageResponse",
    "ReadinessResponse",
    "SaleRecordCreateRequest",
    "SaleRecordResponse",
    "SaleRecordUpdateRequest",
    "SyncJobStartedResponse",
    "SyncJobStatusResponse",
    "SyncTriggerRequest",
    "VehicleCreateRequest",
    "VehicleResponse",
    "VehicleUpdateRequest",
    "list_query_params",
]
