"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache tiers,
sync job store, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from dealer_inventory.core.config import get_settings
from dealer_inventory.core.sync_job_store import SyncJobStore
from dealer_inventory.infrastructure.cache.registry import build_cache_registry
from dealer_inventory.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Redis cache (if enabled), cache registry
    (local tier, CacheAside, invalidators), sync job store. Shutdown order:
    cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    shared = None
    if settings.redis_enabled:
        from dealer_inventory.infrastructure.cache.redis_cache import RedisCache

        shared = RedisCache()
        await shared.connect()
        if not shared.is_available():
            logger.warning("Redis unreachable at startup; serving from the local cache tier")
    app.state.redis_cache = shared
    app.state.cache_registry = build_cache_registry(settings, shared)
    app.state.sync_job_store = SyncJobStore(
        retention_seconds=settings.sync_job_retention_seconds,
        max_jobs=settings.sync_job_max_jobs,
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "redis_cache", None) is not None:
        await app.state.redis_cache.disconnect()
        logger.info("Cache disconnected")

    from dealer_inventory.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
