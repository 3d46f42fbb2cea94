"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 if PokeAPI is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pokedex.api.dependencies import get_pokeapi_client
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pokedex-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    client: ResilientPokeAPIClient = Depends(get_pokeapi_client),
):
    """Readiness probe - includes upstream connectivity."""
    upstream_ok = await client.ping()
    if not upstream_ok:
        logger.warning("Readiness check failed: PokeAPI unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "upstream_unavailable",
            },
        )
    return {"status": "ready", "checks": {"pokeapi": "healthy"}}
