"""
Notes API — Health Check Route
===============================

What:  Liveness endpoint for container health checks and load balancers.
How:   Reports uptime and whether the Supabase client is configured. It does
       not call Supabase; a probe every few seconds should not cost a
       round-trip to the hosted backend.

Status levels:
    - healthy:  Supabase configured (HTTP 200)
    - degraded: Supabase not configured; every notes request will 500 (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter

from notes_api import __version__
from notes_api.config import settings
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Return overall status, version, store configuration state and uptime."""
    if settings.supabase_configured:
        store_status = "configured"
        overall = "healthy"
    else:
        store_status = "not_configured"
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
