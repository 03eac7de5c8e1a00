"""Health check endpoints for liveness and readiness probes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.api.v1.dependencies import get_db
from dealer_inventory.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
)
async def readiness_check(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers; report the shared cache tier state.

    An unavailable shared cache does not fail readiness: reads fall back to
    the local tier and the store.
    """
    shared = getattr(request.app.state, "redis_cache", None)
    if shared is None:
        cache_state = "disabled"
    else:
        cache_state = "ok" if shared.is_available() else "unavailable"
    try:
        await db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Readiness check: database unreachable")
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(
                status="not_ready", database="unavailable", shared_cache=cache_state
            ).model_dump(),
        )
    return ReadinessResponse(shared_cache=cache_state)
