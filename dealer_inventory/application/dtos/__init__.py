"""Application DTOs (use-case inputs and read-models; no ORM types)."""

from dealer_inventory.application.dtos.marketing import ExportResult, ExportVehicle
from dealer_inventory.application.dtos.page import Page
from dealer_inventory.application.dtos.sale_record import (
    SaleRecordCreate,
    SaleRecordResult,
    SaleRecordUpdate,
)
from dealer_inventory.application.dtos.vehicle import VehicleCreate, VehicleResult, VehicleUpdate

__all__ = [
    "ExportResult",
    "ExportVehicle",
    "Page",
    "SaleRecordCreate",
    "SaleRecordResult",
    "SaleRecordUpdate",
    "VehicleCreate",
    "VehicleResult",
    "VehicleUpdate",
]
