from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from commerce_adaptor import __version__
from commerce_adaptor.api.dependencies import get_app_settings
from commerce_adaptor.core.config import Settings
from commerce_adaptor.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Commerce Adaptor"
    commercetools_configured: bool


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health(settings: Settings = Depends(get_app_settings)) -> HealthStatus:
    """Liveness probe; also reports whether commerce settings are complete."""
    logger.debug("Health check requested")
    return HealthStatus(
        status="ok",
        service=settings.PROJECT_NAME,
        commercetools_configured=settings.commercetools_configured,
    )
