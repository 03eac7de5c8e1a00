"""Marketing sync API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from dealer_inventory.application.use_cases.marketing import DEFAULT_SYNC_MESSAGE
from dealer_inventory.domain.enums import SyncJobStatus


class SyncTriggerRequest(BaseModel):
    """Optional body for POST /marketing/sync."""

    message: str = Field(default=DEFAULT_SYNC_MESSAGE, min_length=1, max_length=500)


class SyncJobStartedResponse(BaseModel):
    """Response when a sync job is queued (202)."""

    job_id: str
    status: SyncJobStatus = SyncJobStatus.PENDING
    message: str


class SyncResultResponse(BaseModel):
    """Summary of a finished export."""

    dealership_id: str
    dealership_name: str
    total_vehicles: int
    file_path: str
    synced_at: datetime


class SyncJobStatusResponse(BaseModel):
    """Status of a sync job; result when completed, error when failed."""

    job_id: str
    status: SyncJobStatus
    result: SyncResultResponse | None = None
    error: str | None = None
    created_at: datetime
    finished_at: datetime | None = None
