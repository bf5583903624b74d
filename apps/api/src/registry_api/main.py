"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from registry_api.config import Settings, get_settings
from registry_api.middleware import setup_middleware
from registry_api.models.errors import ValidationProblem
from registry_api.routes import api_router
from registry_api.routes.user import USER_NOT_FOUND
from registry_api.services import init_services
from registry_common.models.user import validation_messages

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """Turn request validation failures into 400/404 responses.

    Non-integer ids fail path validation and answer 404, as an unmatched
    route would. Unparseable JSON answers a plain-text 400. Everything else
    answers 400 with per-field messages.
    """
    errors = exc.errors()
    if any(tuple(error.get("loc", ()))[:1] == ("path",) for error in errors):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": USER_NOT_FOUND})
    if any(error.get("type") == "json_invalid" for error in errors):
        return PlainTextResponse("Invalid JSON", status_code=status.HTTP_400_BAD_REQUEST)

    problem = ValidationProblem(errors=validation_messages(errors))
    logger.info("Rejected invalid payload for %s %s: %s", request.method, request.url.path, problem.errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=problem.model_dump())


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and answer a generic 500."""
    # Let FastAPI handle HTTPException normally
    if isinstance(exc, HTTPException):
        raise exc

    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; read from the environment when omitted

    Returns:
        A configured FastAPI instance owning its own user service
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        logger.info(f"{settings.app_name} v{settings.app_version} started")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Log level: {settings.log_level}")

        yield

        logger.info(f"{settings.app_name} shutting down")

    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=settings.app_name,
        description="User Registry - in-memory user CRUD service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    init_services(app, settings)
    setup_middleware(app, auth_query_param=settings.auth_query_param, protected_prefix=settings.protected_prefix)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "registry_api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.api_reload,
        log_level=_settings.log_level.lower(),
    )
