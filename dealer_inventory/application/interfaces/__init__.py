"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from dealer_inventory.infrastructure or dealer_inventory.api.
"""

from dealer_inventory.application.interfaces.repositories import (
    IDealershipRepository,
    ISaleRecordRepository,
    IUnitOfWork,
    IVehicleRepository,
)
from dealer_inventory.application.interfaces.services import ICacheInvalidator, IListCache

__all__ = [
    "ICacheInvalidator",
    "IDealershipRepository",
    "IListCache",
    "ISaleRecordRepository",
    "IUnitOfWork",
    "IVehicleRepository",
]
