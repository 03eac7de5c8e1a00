"""ORM models. Import here so Base.metadata sees every table."""

from dealer_inventory.infrastructure.persistence.models.dealership import Dealership
from dealer_inventory.infrastructure.persistence.models.sale_record import (
    SOLD_UNIQUE_INDEX,
    SaleRecord,
)
from dealer_inventory.infrastructure.persistence.models.vehicle import Vehicle

__all__ = ["Dealership", "SOLD_UNIQUE_INDEX", "SaleRecord", "Vehicle"]
