"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, status

from kosync.web.dependencies import StoreDep
from kosync.web.schemas import HealthResponse

router = APIRouter(prefix="/healthcheck", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse()


@router.get("/store", response_model=HealthResponse)
async def store_health_check(store: StoreDep) -> HealthResponse:
    """Check that the key-value store answers."""
    if not await store.ping():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="STORE_UNAVAILABLE",
        )
    return HealthResponse()
