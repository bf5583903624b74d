"""Middleware setup for the FastAPI application."""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


def is_protected_path(path: str, prefix: str) -> bool:
    """Check whether ``path`` is ``prefix`` or one of its sub-paths.

    Matching is per path segment and case-insensitive, so ``/users`` covers
    ``/users`` and ``/Users/1`` but not ``/userstats``.

    Args:
        path: Request path
        prefix: Protected path prefix

    Returns:
        True if the path falls under the prefix
    """
    path = path.lower()
    prefix = prefix.lower().rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request line and the status it was answered with."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        logger.info("Request: %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.info("Response: %s", response.status_code)
        return response


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Reject requests under a prefix unless they carry ``<param>=true``.

    This is a placeholder gate, not authentication: anyone can add the flag.
    """

    def __init__(self, app: ASGIApp, query_param: str = "authenticated", prefix: str = "/users") -> None:
        super().__init__(app)
        self.query_param = query_param
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if is_protected_path(request.url.path, self.prefix) and request.query_params.get(self.query_param) != "true":
            logger.warning("Rejected unauthenticated request: %s %s", request.method, request.url.path)
            return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)
        return await call_next(request)


def setup_middleware(app: FastAPI, auth_query_param: str = "authenticated", protected_prefix: str = "/users") -> None:
    """Setup middleware for the FastAPI application.

    Middleware added last runs first, so the logging wrapper sees every
    request, including the ones the gate rejects.

    Args:
        app: FastAPI application instance
        auth_query_param: Query parameter the access gate checks
        protected_prefix: Path prefix guarded by the access gate
    """
    app.add_middleware(AccessGateMiddleware, query_param=auth_query_param, prefix=protected_prefix)
    app.add_middleware(RequestLoggingMiddleware)

    logger.info("Access gate enabled for %s (query parameter %r)", protected_prefix, auth_query_param)
