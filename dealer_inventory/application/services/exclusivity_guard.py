"""Exclusivity guard: a vehicle has at most one SOLD sale record per dealership.

The check alone is a check-then-act race between concurrent writers, so it
runs in two layers inside the write transaction:

1. The vehicle row is locked (SELECT ... FOR UPDATE), serializing SOLD
   transitions for that vehicle until commit or rollback.
2. The store keeps a partial unique index on (dealership_id, vehicle_id)
   WHERE status = 'SOLD'; the repository turns a violation into the same
   VehicleAlreadySoldException the guard raises.
"""

import logging

from dealer_inventory.application.interfaces.repositories import (
    ISaleRecordRepository,
    IVehicleRepository,
)
from dealer_inventory.domain.exceptions import (
    ResourceNotFoundException,
    VehicleAlreadySoldException,
)

logger = logging.getLogger(__name__)


class ExclusivityGuard:
    """Rejects a second SOLD sale record for the same vehicle."""

    def __init__(
        self,
        vehicle_repo: IVehicleRepository,
        sale_record_repo: ISaleRecordRepository,
    ) -> None:
        self.vehicle_repo = vehicle_repo
        self.sale_record_repo = sale_record_repo

    async def assert_sale_allowed(
        self,
        tenant_id: str,
        vehicle_id: int,
        excluding_record_id: int | None = None,
    ) -> None:
        """Raise if another SOLD record exists for the vehicle.

        Must be called inside the transaction that writes the SOLD record;
        the vehicle lock is held until that transaction ends.

        Raises:
            ResourceNotFoundException: Vehicle missing, deleted, or in another dealership.
            VehicleAlreadySoldException: Another record already holds SOLD.
        """
        vehicle = await self.vehicle_repo.lock(vehicle_id)
        if vehicle is None:
            raise ResourceNotFoundException("vehicle", vehicle_id)
        existing = await self.sale_record_repo.find_other_sold(
            vehicle_id, excluding_id=excluding_record_id
        )
        if existing is not None:
            logger.info(
                "Rejected SOLD record for vehicle %s in dealership %s: record %s already SOLD",
                vehicle_id,
                tenant_id,
                existing.id,
            )
            raise VehicleAlreadySoldException(vehicle_id, existing.id)
