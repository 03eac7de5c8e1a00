"""Domain enumerations for the dealer inventory service.

Enums represent fixed sets of domain values (vehicle and sale status,
sort direction).
"""

from enum import Enum


class VehicleStatus(str, Enum):
    """Inventory status of a vehicle."""

    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    SOLD = "SOLD"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class SaleStatus(str, Enum):
    """Status of a sale record (bill of sale).

    Observed flow is DRAFT -> {SOLD, PENDING, CANCELLED} and
    PENDING -> {SOLD, CANCELLED}; no transition table is enforced. Only a
    transition into SOLD is checked (one SOLD record per vehicle).
    """

    DRAFT = "DRAFT"
    SOLD = "SOLD"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class SortDirection(str, Enum):
    """Sort direction for list queries."""

    ASC = "ASC"
    DESC = "DESC"


class SyncJobStatus(str, Enum):
    """Lifecycle of a marketing sync export job."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
