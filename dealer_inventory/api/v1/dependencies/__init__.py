"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the request's dealership and
application use cases. Routes depend only on these, not on infra directly.
"""

from dealer_inventory.api.v1.dependencies.auth import get_tenant_id, is_valid_tenant_id_format
from dealer_inventory.api.v1.dependencies.cache import get_cache_registry
from dealer_inventory.api.v1.dependencies.db import get_db, get_db_for_write, get_uow
from dealer_inventory.api.v1.dependencies.services import (
    get_marketing_sync_runner,
    get_sale_record_repo,
    get_sale_record_service,
    get_sync_job_store,
    get_vehicle_repo,
    get_vehicle_service,
)

__all__ = [
    "get_cache_registry",
    "get_db",
    "get_db_for_write",
    "get_marketing_sync_runner",
    "get_sale_record_repo",
    "get_sale_record_service",
    "get_sync_job_store",
    "get_tenant_id",
    "get_uow",
    "get_vehicle_repo",
    "get_vehicle_service",
    "is_valid_tenant_id_format",
]
