"""Health check and diagnostic routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from registry_api.config import Settings
from registry_api.models.health import HealthCheckResponse
from registry_api.services import get_app_settings, get_user_service
from registry_common.services.user_service import UserService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    service: UserService = Depends(get_user_service),
) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status, version and user count
    """
    return HealthCheckResponse(
        status="ok",
        version=settings.app_version,
        environment=settings.environment,
        user_count=service.count(),
    )


@router.get("/test", response_class=PlainTextResponse)
async def greeting() -> str:
    return "Hello from test endpoint!"
