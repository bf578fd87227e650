"""
Image hosting through Cloudinary's upload API.

Documentation: https://cloudinary.com/documentation/image_upload_api_reference

Uploads are signed: the signed parameters are sorted, joined as
``key=value`` pairs with ``&``, suffixed with the API secret and hashed
with SHA-1. This is the only collaborator whose failure fails a request.
"""

import hashlib
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import requests

logger = logging.getLogger(__name__)


class HostingError(Exception):
    """Raised when an image cannot be uploaded to the host."""
    pass


def sign_params(params: Dict[str, str], api_secret: str) -> str:
    """Compute a Cloudinary API signature.

    Args:
        params: Parameters to sign (``file``, ``api_key`` and
            ``resource_type`` must not be included).
        api_secret: Account API secret.

    Returns:
        Hex SHA-1 signature.
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """
    Client for signed Cloudinary image uploads.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        upload_url: str,
        folder: str = "",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.upload_url = upload_url
        self.folder = folder
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock
        if not (cloud_name and api_key and api_secret):
            logger.warning("Cloudinary credentials not provided. Uploads will fail.")

    def upload(self, file_path: Union[str, Path]) -> str:
        """
        Upload an image and return its stable delivery URL.

        Args:
            file_path: Path of the staged image

        Returns:
            The asset's ``secure_url``

        Raises:
            HostingError: If credentials are missing, the request fails,
                or the response carries no ``secure_url``
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise HostingError("Cloudinary credentials are not configured")

        params = {"timestamp": str(int(self.clock()))}
        if self.folder:
            params["folder"] = self.folder

        data = dict(params, api_key=self.api_key, signature=sign_params(params, self.api_secret))

        path = Path(file_path)
        try:
            with open(path, "rb") as f:
                response = self.session.post(
                    self.upload_url,
                    data=data,
                    files={"file": (path.name, f)},
                    timeout=self.timeout,
                )
            response.raise_for_status()
            payload = response.json()
        except (OSError, requests.RequestException, ValueError) as e:
            raise HostingError(f"Cloudinary upload failed: {e}") from e

        secure_url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not secure_url:
            raise HostingError("Cloudinary response did not include a secure_url")

        logger.info(f"Uploaded {path.name} to {secure_url}")
        return secure_url
