"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from oidexplorer import __version__
from oidexplorer.api.dependencies import get_data_service
from oidexplorer.api.schemas import HealthResponse
from oidexplorer.constants import DB_CONNECTED, DB_DISCONNECTED
from oidexplorer.services.data_service import DataService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> dict[str, str]:
    """Basic health check for load balancers."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/detailed", response_model=HealthResponse)
async def health_detailed(
    data_service: DataService = Depends(get_data_service),
) -> dict[str, object]:
    """Health check including database connectivity."""
    db_healthy = await data_service.check_connection()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "version": __version__,
        "components": {
            "database": {
                "status": DB_CONNECTED if db_healthy else DB_DISCONNECTED
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
