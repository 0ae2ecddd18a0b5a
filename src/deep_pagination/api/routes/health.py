from fastapi import APIRouter, Depends, Response, status

from deep_pagination.api.dependencies import get_engine
from deep_pagination.core.ports.search_engine import SearchEngine
from deep_pagination.schemas import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness check: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    engine: SearchEngine = Depends(get_engine),
) -> ReadinessResponse:
    """Readiness check: is the search engine reachable?"""
    if await engine.ping():
        return ReadinessResponse(status="ok", engine="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", engine="down")
