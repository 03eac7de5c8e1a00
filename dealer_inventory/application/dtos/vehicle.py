"""DTOs for vehicle use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from dealer_inventory.domain.enums import VehicleStatus


@dataclass(frozen=True)
class VehicleResult:
    """Vehicle read-model."""

    id: int
    dealership_id: str
    vin: str
    year: int
    make: str
    model: str
    price: Decimal
    status: VehicleStatus
    image_url: str | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class VehicleCreate:
    """Command for creating a vehicle."""

    vin: str
    year: int
    make: str
    model: str
    price: Decimal
    status: VehicleStatus = VehicleStatus.AVAILABLE


class _Unset:
    """Marker for a field left out of a partial update."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class VehicleUpdate:
    """Partial update.

    price and status are never null, so None leaves them unchanged.
    image_url is nullable: UNSET leaves it unchanged and None clears it.
    """

    price: Decimal | None = None
    status: VehicleStatus | None = None
    image_url: str | None = UNSET

    def changes_against(self, current: VehicleResult) -> dict[str, object]:
        """Return only the fields whose value differs from current."""
        changes: dict[str, object] = {}
        for name in ("price", "status"):
            value = getattr(self, name)
            if value is not None and value != getattr(current, name):
                changes[name] = value
        if self.image_url is not UNSET and self.image_url != current.image_url:
            changes["image_url"] = self.image_url
        return changes
