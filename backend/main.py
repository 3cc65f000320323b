"""
Staffing Planner - Main Application Entry Point

Scheduling backend for assigning people's hours to projects.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.exceptions import (
    ConfigurationMissingError,
    NotFoundError,
    PlannerError,
    ValidationError,
)
from app.core.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Staffing Planner in {settings.ENVIRONMENT} mode...")

    from app.infrastructure.local.database import init_db

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Staffing Planner...")


def _error_response(status_code: int, exc: PlannerError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP status codes."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(ConfigurationMissingError)
    async def configuration_handler(request: Request, exc: ConfigurationMissingError):
        logger.error(f"Configuration missing for {request.method} {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Staffing Planner",
        description="Time block scheduling for project assignments",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from app.api import assignments, audit, config, leaves

    app.include_router(assignments.router, prefix="/api/assignments", tags=["assignments"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
    app.include_router(leaves.router, prefix="/api/leaves", tags=["leaves"])
    app.include_router(audit.router, prefix="/api/audit", tags=["audit"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
