"""Main application entry point for Sunboard."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sunboard import __version__
from sunboard.api.middleware import APIKeyMiddleware, RateLimitMiddleware
from sunboard.utils.config import Settings, get_settings
from sunboard.utils.exceptions import ConflictError, NotFoundError, ValidationError

_logger = logging.getLogger("sunboard.main")


def _validate_production_env(settings: Settings) -> None:
    """Fail fast if required environment variables are missing in production."""
    if not settings.is_production():
        return

    missing = []
    if not settings.security.api_key:
        missing.append("SUNBOARD_API_KEY")
    if not settings.database.url or "sqlite" in settings.database.url:
        missing.append("DATABASE_URL (must be PostgreSQL in production)")

    if missing:
        msg = (
            "Production startup blocked, missing required environment variables: "
            + ", ".join(missing)
        )
        _logger.critical(msg)
        raise SystemExit(msg)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        _logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    is_production = settings.is_production()

    app = FastAPI(
        title="Sunboard API",
        description="Project and task tracking with cross-functional reviews",
        version=__version__,
        debug=False if is_production else settings.debug,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
    )

    # Rate limiting (runs after auth, so unauthenticated requests aren't counted)
    app.add_middleware(RateLimitMiddleware)

    # API key authentication (enabled when SUNBOARD_API_KEY is set)
    app.add_middleware(APIKeyMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-API-Key"],
    )

    _register_exception_handlers(app)

    from sunboard.api.v1 import router as api_router

    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": "Sunboard API", "version": __version__}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.on_event("startup")
    async def startup_event():
        """Validate the environment and create missing tables."""
        _validate_production_env(settings)
        from sunboard.core.database import init_database

        await init_database()

    @app.on_event("shutdown")
    async def shutdown_event():
        from sunboard.core.database import dispose_engine

        await dispose_engine()

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "sunboard.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
