"""DTOs for sale record use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from dealer_inventory.domain.enums import SaleStatus


@dataclass(frozen=True)
class SaleRecordResult:
    """Sale record read-model."""

    id: int
    dealership_id: str
    vehicle_id: int
    final_price: Decimal
    buyer_name: str
    buyer_address: str
    sale_date: datetime
    status: SaleStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SaleRecordCreate:
    """Command for creating a sale record. Status defaults to SOLD."""

    vehicle_id: int
    final_price: Decimal
    buyer_name: str
    buyer_address: str
    status: SaleStatus = SaleStatus.SOLD
    sale_date: datetime | None = None


@dataclass(frozen=True)
class SaleRecordUpdate:
    """Partial update; None means 'leave unchanged'."""

    final_price: Decimal | None = None
    buyer_name: str | None = None
    buyer_address: str | None = None
    status: SaleStatus | None = None

    def changes_against(self, current: SaleRecordResult) -> dict[str, object]:
        """Return only the fields whose value differs from current."""
        changes: dict[str, object] = {}
        for name in ("final_price", "buyer_name", "buyer_address", "status"):
            value = getattr(self, name)
            if value is not None and value != getattr(current, name):
                changes[name] = value
        return changes
