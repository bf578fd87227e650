"""Application configuration using Pydantic Settings.

This module provides type-safe environment variable management
for the HTTP layer and the external image-hosting and
reverse-geocoding collaborators.
"""

from functools import lru_cache
from typing import List

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        APP_ENV: Application environment (development, staging, production).
        DEBUG: Enable debug mode.
        CORS_ORIGINS: Comma-separated list of allowed CORS origins.
        UPLOAD_DIR: Directory where uploads are staged before hosting.
        MAX_UPLOAD_BYTES: Largest accepted upload, in bytes.
        CLOUDINARY_CLOUD_NAME: Cloudinary cloud the images are hosted in.
        CLOUDINARY_API_KEY: Cloudinary API key.
        CLOUDINARY_API_SECRET: Cloudinary API secret used to sign uploads.
        CLOUDINARY_FOLDER: Folder uploaded assets are placed in.
        GEOCODIO_API_KEY: Geocodio API key for reverse geocoding.
        GEOCODIO_BASE_URL: Geocodio API root.
        GEOCODIO_API_VERSION: Geocodio API version segment.
        HTTP_TIMEOUT_SECONDS: Timeout for outbound HTTP calls.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: str = "*"

    # Upload staging
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    # Image hosting
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "weweb"

    # Reverse geocoding
    GEOCODIO_API_KEY: str = ""
    GEOCODIO_BASE_URL: str = "https://api.geocod.io"
    GEOCODIO_API_VERSION: str = "1.7"

    HTTP_TIMEOUT_SECONDS: float = 10.0

    @computed_field  # type: ignore[misc]
    @property
    def cloudinary_upload_url(self) -> str:
        """Construct the Cloudinary image upload endpoint.

        Returns:
            Upload URL for the configured cloud.
        """
        return (
            f"https://api.cloudinary.com/v1_1/{self.CLOUDINARY_CLOUD_NAME}"
            "/image/upload"
        )

    @computed_field  # type: ignore[misc]
    @property
    def geocodio_reverse_url(self) -> str:
        """Construct the Geocodio reverse geocoding endpoint.

        Returns:
            Reverse geocoding URL for the configured API version.
        """
        base = self.GEOCODIO_BASE_URL.rstrip("/")
        return f"{base}/v{self.GEOCODIO_API_VERSION}/reverse"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def hosting_configured(self) -> bool:
        """Whether all Cloudinary credentials are present."""
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    @property
    def geocoding_configured(self) -> bool:
        """Whether a Geocodio API key is present."""
        return bool(self.GEOCODIO_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance.
    """
    return Settings()


settings = get_settings()
