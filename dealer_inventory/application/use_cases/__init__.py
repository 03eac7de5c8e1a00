"""Application use cases: one entry point per workflow."""

from dealer_inventory.application.use_cases.marketing import MarketingSyncProcessor
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.application.use_cases.vehicles import VehicleService

__all__ = [
    "MarketingSyncProcessor",
    "SaleRecordService",
    "VehicleService",
]
