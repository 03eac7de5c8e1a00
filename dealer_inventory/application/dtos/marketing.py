"""DTOs for the marketing sync export."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ExportVehicle:
    """Vehicle fields included in the marketing export."""

    id: int
    year: int
    make: str
    model: str


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one marketing sync export."""

    dealership_id: str
    dealership_name: str
    total_vehicles: int
    file_path: str
    synced_at: datetime
    vehicles: list[ExportVehicle] = field(default_factory=list)
