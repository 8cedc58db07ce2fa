"""
Notes API — Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Reports the version, the number of notes held, and process uptime.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   The note store is attached and answering (HTTP 200)
    - unhealthy: No store is attached to the app (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from notes_api import __version__
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        logger.warning("Health check: note store is not attached")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        overall, note_count = "unhealthy", 0
    else:
        overall, note_count = "healthy", store.count()

    return HealthResponse(
        status=overall,
        version=__version__,
        note_count=note_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
