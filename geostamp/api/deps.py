"""Dependency injection utilities for API endpoints.

Collaborator clients are built from the process settings once and
handed to routes through FastAPI dependencies, so tests can replace
them with ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from geostamp.core.config import Settings, get_settings
from geostamp.services.geocoding import GeocodioClient
from geostamp.services.hosting import CloudinaryClient


@lru_cache
def get_geocoder() -> GeocodioClient:
    """Get the shared reverse-geocoding client.

    Returns:
        GeocodioClient configured from settings.
    """
    settings = get_settings()
    return GeocodioClient(
        api_key=settings.GEOCODIO_API_KEY,
        reverse_url=settings.geocodio_reverse_url,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_host() -> CloudinaryClient:
    """Get the shared image hosting client.

    Returns:
        CloudinaryClient configured from settings.
    """
    settings = get_settings()
    return CloudinaryClient(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        upload_url=settings.cloudinary_upload_url,
        folder=settings.CLOUDINARY_FOLDER,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


# Type aliases for dependencies
AppSettings = Annotated[Settings, Depends(get_settings)]
Geocoder = Annotated[GeocodioClient, Depends(get_geocoder)]
ImageHost = Annotated[CloudinaryClient, Depends(get_host)]
