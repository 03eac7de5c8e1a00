"""Marketing sync: export a dealership's live inventory as a JSON file."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from dealer_inventory.application.dtos.marketing import ExportResult, ExportVehicle
from dealer_inventory.application.interfaces.repositories import (
    IDealershipRepository,
    IVehicleRepository,
)
from dealer_inventory.domain.exceptions import ResourceNotFoundException
from dealer_inventory.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_SYNC_MESSAGE = "Manual API Trigger by Admin"


class IExportWriter(Protocol):
    """Writes one export document; returns where it was stored."""

    async def write(self, file_name: str, payload: dict[str, Any]) -> str: ...


def export_file_name(dealership_id: str, timestamp_ms: int) -> str:
    return f"{dealership_id}_marketing_sync_{timestamp_ms}.json"


class MarketingSyncProcessor:
    """Builds and writes the marketing export for one dealership."""

    def __init__(
        self,
        dealership_repo: IDealershipRepository,
        vehicle_repo: IVehicleRepository,
        writer: IExportWriter,
    ) -> None:
        self.dealership_repo = dealership_repo
        self.vehicle_repo = vehicle_repo
        self.writer = writer

    async def process(self, tenant_id: str, message: str = DEFAULT_SYNC_MESSAGE) -> ExportResult:
        """Export all live vehicles of the dealership.

        Raises:
            ResourceNotFoundException: Unknown dealership.
            ExportException: The export file could not be written.
        """
        logger.info("Starting marketing sync for dealership %s", tenant_id)
        name = await self.dealership_repo.get_name(tenant_id)
        if name is None:
            logger.warning("Dealership %s not found; aborting sync", tenant_id)
            raise ResourceNotFoundException("dealership", tenant_id)
        vehicles = [
            ExportVehicle(id=v.id, year=v.year, make=v.make, model=v.model)
            for v in await self.vehicle_repo.list_live()
        ]
        synced_at = utc_now()
        payload = {
            "syncTriggerMessage": message,
            "dealershipId": tenant_id,
            "dealershipName": name,
            "totalVehicles": len(vehicles),
            "vehicles": [
                {"id": v.id, "year": v.year, "make": v.make, "model": v.model}
                for v in vehicles
            ],
            "syncTimestamp": synced_at.isoformat(),
        }
        file_path = await self.writer.write(
            export_file_name(tenant_id, int(synced_at.timestamp() * 1000)), payload
        )
        logger.info("Marketing sync complete for dealership %s: %s", tenant_id, file_path)
        return ExportResult(
            dealership_id=tenant_id,
            dealership_name=name,
            total_vehicles=len(vehicles),
            file_path=file_path,
            synced_at=synced_at,
            vehicles=vehicles,
        )
