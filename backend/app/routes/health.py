"""
ContactBook Backend — Root & Health Check Routes
==================================================

What:  The root greeting endpoint and a dependency-aware health probe.
Why:   GET / is the trivial "is the API up" check clients already rely on;
       GET /health tells load balancers whether the document store is reachable.
How:   create_health_router() closes over the ContactRepository so the probe
       uses the same connection pool as real traffic.

Status levels:
    - healthy:   Document store reachable (HTTP 200)
    - unhealthy: Document store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response

from app import __version__
from app.exceptions import DatabaseError
from app.repositories.contact_repository import ContactRepository
from app.schemas.contact import HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "GET request successful !"


def create_health_router(repository: ContactRepository) -> APIRouter:
    """Build the router for GET / and GET /health."""
    router = APIRouter(tags=["Health"])
    # Initialized once per app so uptime is reported per instance
    start_time = time.time()

    @router.get(
        "/",
        response_model=MessageResponse,
        summary="Root greeting",
    )
    async def root() -> MessageResponse:
        return MessageResponse(message=ROOT_MESSAGE)

    @router.get(
        "/health",
        response_model=HealthResponse,
        responses={503: {"description": "Document store unreachable", "model": HealthResponse}},
        summary="Service health check",
    )
    async def health_check(response: Response) -> HealthResponse:
        """
        Check that the document store answers a trivial query.

        Why lightweight: Probes run every 10-30 seconds; SELECT 1 is essentially free.
        """
        db_status = "connected"
        overall = "healthy"

        try:
            await repository.ping()
        except DatabaseError as e:
            db_status = "disconnected"
            overall = "unhealthy"
            response.status_code = 503
            logger.warning("Health check: database unreachable: %s", e.context)

        return HealthResponse(
            status=overall,
            version=__version__,
            database=db_status,
            uptime_seconds=round(time.time() - start_time, 2),
        )

    return router
