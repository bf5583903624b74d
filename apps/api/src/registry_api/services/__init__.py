"""Service initialization and dependency injection."""

import logging

from fastapi import FastAPI, Request
from registry_api.config import Settings
from registry_common.services.user_service import InMemoryUserService, UserService

logger = logging.getLogger(__name__)


def init_services(app: FastAPI, settings: Settings) -> None:
    """Create the services owned by an application instance.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.state.settings = settings
    app.state.user_service = InMemoryUserService(id_strategy=settings.id_strategy)
    logger.info("Initialized InMemoryUserService (id strategy: %s)", settings.id_strategy)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    """Get the user service owned by the running application.

    Args:
        request: Incoming request

    Returns:
        UserService instance
    """
    return request.app.state.user_service
