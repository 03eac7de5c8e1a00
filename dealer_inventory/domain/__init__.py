"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from dealer_inventory.domain.enums import SaleStatus, SortDirection, SyncJobStatus, VehicleStatus
from dealer_inventory.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    DealerInventoryException,
    DuplicateVinException,
    InvalidQueryException,
    ResourceNotFoundException,
    ValidationException,
    VehicleAlreadySoldException,
)

__all__ = [
    "AuthenticationException",
    "ConflictException",
    "DealerInventoryException",
    "DuplicateVinException",
    "InvalidQueryException",
    "ResourceNotFoundException",
    "SaleStatus",
    "SortDirection",
    "SyncJobStatus",
    "ValidationException",
    "VehicleAlreadySoldException",
    "VehicleStatus",
]
