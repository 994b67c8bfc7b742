"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import favorites, health, preferences, routing, saved_routes, working_route
from .config import settings

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
            for error in exc.errors()
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {problems}")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal error")

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routing.router, prefix=settings.api_prefix)
    app.include_router(preferences.router, prefix=settings.api_prefix)
    app.include_router(favorites.router, prefix=settings.api_prefix)
    app.include_router(saved_routes.router, prefix=settings.api_prefix)
    app.include_router(working_route.router, prefix=settings.api_prefix)
    return app


app = create_app()
