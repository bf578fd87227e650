"""Health check endpoint for service monitoring.

This module provides health and readiness endpoints for
container orchestration and monitoring systems.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from geostamp import __version__
from geostamp.api.deps import AppSettings

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=Dict[str, Any],
    summary="Health Check",
    description="Check if the API service is running.",
)
async def health_check(settings: AppSettings) -> Dict[str, Any]:
    """Perform a basic health check.

    Returns:
        Dictionary with service status and metadata.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
        "version": __version__,
    }


@router.get(
    "/health/ready",
    response_model=Dict[str, Any],
    summary="Readiness Check",
    description="Check if the external collaborators are configured.",
)
async def readiness_check(settings: AppSettings) -> Dict[str, Any]:
    """Report whether hosting and geocoding credentials are present.

    Hosting is required to serve uploads; geocoding only degrades the
    watermark when missing.

    Args:
        settings: Application settings.

    Returns:
        Dictionary with detailed collaborator status.
    """
    hosting_status = "configured" if settings.hosting_configured else "missing_credentials"
    geocoding_status = "configured" if settings.geocoding_configured else "missing_credentials"

    overall_status = "ready" if settings.hosting_configured else "not_ready"

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "image_hosting": {"status": hosting_status},
            "geocoding": {"status": geocoding_status},
        },
    }
