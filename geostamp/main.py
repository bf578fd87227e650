"""FastAPI application entry point.

This module initializes the FastAPI application with logging, CORS,
middleware, and route registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geostamp import __version__
from geostamp.api.endpoints import health, watermark
from geostamp.core.config import settings
from geostamp.core.logging import setup_logging
from geostamp.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers

setup_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    # Startup
    logger.info("Starting geostamp watermark API...")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    if not settings.hosting_configured:
        logger.warning("Cloudinary credentials missing; /upload will fail")

    yield

    # Shutdown
    logger.info("Shutting down geostamp watermark API...")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="geostamp",
        description=(
            "Watermarks uploaded photos with where and when they were "
            "taken, labelled with whether each fact came from the photo's "
            "embedded metadata or from the uploading device."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handling middleware
    app.add_middleware(ErrorHandlerMiddleware)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(watermark.router)

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3000)
