# app/api/routes/health.py

from fastapi import APIRouter, Depends

from app.schemas.responses import HealthResponse
from app.api.dependencies import get_health_checker
from app.services.health import HealthChecker
from app.utils.config import get_settings

router = APIRouter()

@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the service"
)
async def health_check(
    health_checker: HealthChecker = Depends(get_health_checker)
) -> HealthResponse:
    """Check service health status."""
    components = await health_checker.check()
    return HealthResponse(
        status="healthy" if health_checker.is_healthy(components) else "unhealthy",
        version=get_settings().app_version,
        components=components
    )
