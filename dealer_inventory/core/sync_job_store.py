"""In-memory store for marketing sync background jobs.

Single place for job state; no shared mutable dict on app.state.
Jobs are keyed by job_id and remember their dealership so status reads
stay tenant-scoped.

Finished jobs are kept for retention_seconds, and the store holds at most
max_jobs entries; registering a job prunes expired entries first, then the
oldest finished ones. Pending and running jobs are never evicted.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from dealer_inventory.domain.enums import SyncJobStatus
from dealer_inventory.shared.utils.datetime import utc_now


class SyncJobStore:
    """In-memory store for sync job status and results."""

    def __init__(
        self,
        retention_seconds: int = 3600,
        max_jobs: int = 1000,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._jobs: dict[str, dict[str, Any]] = {}
        self.retention_seconds = retention_seconds
        self.max_jobs = max_jobs
        self._clock = clock

    def __len__(self) -> int:
        return len(self._jobs)

    def set(self, job_id: str, tenant_id: str, message: str) -> None:
        """Register a new job as pending."""
        self.prune()
        self._jobs[job_id] = {
            "tenant_id": tenant_id,
            "message": message,
            "status": SyncJobStatus.PENDING,
            "result": None,
            "error": None,
            "created_at": self._clock(),
            "finished_at": None,
        }

    def prune(self) -> int:
        """Drop finished jobs past retention, then the oldest finished beyond capacity.

        Returns the number of jobs removed.
        """
        cutoff = self._clock() - timedelta(seconds=self.retention_seconds)
        finished = sorted(
            (
                (job["finished_at"], job_id)
                for job_id, job in self._jobs.items()
                if job["finished_at"] is not None
            ),
        )
        # Room for the job being registered.
        overflow = len(self._jobs) + 1 - self.max_jobs
        removed = 0
        for finished_at, job_id in finished:
            if finished_at > cutoff and removed >= overflow:
                break
            del self._jobs[job_id]
            removed += 1
        return removed

    def get(self, job_id: str) -> dict[str, Any] | None:
        """Return job payload or None if not found."""
        return self._jobs.get(job_id)

    def get_for_tenant(self, job_id: str, tenant_id: str) -> dict[str, Any] | None:
        """Return job payload only if it belongs to tenant_id."""
        job = self._jobs.get(job_id)
        if job is None or job["tenant_id"] != tenant_id:
            return None
        return job

    def update(
        self,
        job_id: str,
        status: SyncJobStatus,
        result: Any = None,
        error: str | None = None,
    ) -> None:
        """Update job status and optional result/error."""
        job = self._jobs.get(job_id)
        if not job:
            return
        job["status"] = status
        if result is not None:
            job["result"] = result
        if error is not None:
            job["error"] = error
        if status in (SyncJobStatus.COMPLETED, SyncJobStatus.FAILED):
            job["finished_at"] = self._clock()
