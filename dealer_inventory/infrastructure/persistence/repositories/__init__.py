"""Repositories. Each returns application DTOs and is scoped to one dealership."""

from dealer_inventory.infrastructure.persistence.repositories.base import (
    BaseRepository,
    TenantScopedRepository,
)
from dealer_inventory.infrastructure.persistence.repositories.dealership_repo import (
    DealershipRepository,
)
from dealer_inventory.infrastructure.persistence.repositories.sale_record_repo import (
    SaleRecordRepository,
)
from dealer_inventory.infrastructure.persistence.repositories.vehicle_repo import (
    VehicleRepository,
)

__all__ = [
    "BaseRepository",
    "DealershipRepository",
    "SaleRecordRepository",
    "TenantScopedRepository",
    "VehicleRepository",
]
