"""
Cashlens
FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashlens.config import Settings, get_settings
from cashlens.core.errors import global_exception_handler
from cashlens.core.exceptions import CashlensError
from cashlens.insights.router import router as insights_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def create_application(settings: Settings = None) -> FastAPI:
    """
    Application factory.
    Creates and configures the FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        logger.info("Starting %s v%s", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)
        yield
        logger.info("%s shutdown complete", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Financial insights from QuickBooks and Xero reports",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(CashlensError, global_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routers(app, settings)

    return app


def register_routers(app: FastAPI, settings: Settings) -> None:
    """Register all API routers."""

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment
        }

    app.include_router(insights_router)


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "cashlens.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
