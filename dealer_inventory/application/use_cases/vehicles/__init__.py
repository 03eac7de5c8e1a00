"""Vehicle use cases."""

from dealer_inventory.application.use_cases.vehicles.vehicle_operations import (
    VEHICLE_QUERY_CONFIG,
    VehicleService,
)

__all__ = ["VEHICLE_QUERY_CONFIG", "VehicleService"]
