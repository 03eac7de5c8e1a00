"""Marketing sync API: queue an inventory export and poll its status."""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from dealer_inventory.api.v1.dependencies import (
    get_marketing_sync_runner,
    get_sync_job_store,
    get_tenant_id,
)
from dealer_inventory.application.dtos.marketing import ExportResult
from dealer_inventory.core.limiter import limit_sync
from dealer_inventory.core.sync_job_store import SyncJobStore
from dealer_inventory.domain.enums import SyncJobStatus
from dealer_inventory.schemas.marketing import (
    SyncJobStartedResponse,
    SyncJobStatusResponse,
    SyncResultResponse,
    SyncTriggerRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Strong references so running jobs are not garbage-collected.
_background_tasks: set[asyncio.Task] = set()


async def _run_sync_job(
    store: SyncJobStore,
    job_id: str,
    run_sync: Callable[[str, str], Awaitable[ExportResult]],
) -> None:
    """Background task: run the export and record the outcome in the job store."""
    job = store.get(job_id)
    if not job:
        return
    store.update(job_id, SyncJobStatus.RUNNING)
    try:
        result = await run_sync(job["tenant_id"], job["message"])
        store.update(job_id, SyncJobStatus.COMPLETED, result=result)
    except Exception as e:
        logger.exception("Marketing sync job %s failed", job_id)
        store.update(job_id, SyncJobStatus.FAILED, error=str(e))


@router.post("/sync", response_model=SyncJobStartedResponse, status_code=202)
@limit_sync
async def trigger_sync(
    request: Request,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    store: Annotated[SyncJobStore, Depends(get_sync_job_store)],
    run_sync: Annotated[
        Callable[[str, str], Awaitable[ExportResult]],
        Depends(get_marketing_sync_runner),
    ],
    body: SyncTriggerRequest | None = None,
):
    """Queue a marketing export of the dealership's live inventory. Poll the job for status."""
    message = body.message if body else SyncTriggerRequest().message
    job_id = str(uuid.uuid4())
    store.set(job_id, tenant_id, message)
    task = asyncio.create_task(_run_sync_job(store, job_id, run_sync))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return SyncJobStartedResponse(
        job_id=job_id,
        message=f"Sync job for dealership {tenant_id} successfully queued.",
    )


@router.get("/sync/jobs/{job_id}", response_model=SyncJobStatusResponse)
async def get_sync_job_status(
    job_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    store: Annotated[SyncJobStore, Depends(get_sync_job_store)],
):
    """Status and result of a sync job (only the dealership's own jobs)."""
    job = store.get_for_tenant(job_id, tenant_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    result: ExportResult | None = job.get("result")
    return SyncJobStatusResponse(
        job_id=job_id,
        status=job["status"],
        result=(
            SyncResultResponse(
                dealership_id=result.dealership_id,
                dealership_name=result.dealership_name,
                total_vehicles=result.total_vehicles,
                file_path=result.file_path,
                synced_at=result.synced_at,
            )
            if result
            else None
        ),
        error=job.get("error"),
        created_at=job["created_at"],
        finished_at=job.get("finished_at"),
    )
