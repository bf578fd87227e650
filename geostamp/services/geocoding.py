"""
Reverse geocoding through the Geocodio API.

Documentation: https://www.geocod.io/docs/#reverse-geocoding

Failures are soft: any HTTP error, malformed payload or empty result
set is logged and reported as "no address". Nothing is retried or
cached.
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from geostamp.models.geo import AddressComponents

logger = logging.getLogger(__name__)


class GeocodioClient:
    """
    Client for Geocodio reverse geocoding.
    """

    def __init__(
        self,
        api_key: str,
        reverse_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.reverse_url = reverse_url
        self.timeout = timeout
        self.session = session or requests.Session()
        if not self.api_key:
            logger.warning("Geocodio API key not provided. Reverse geocoding will be disabled.")

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[AddressComponents]:
        """
        Resolve a coordinate to the address of the best match.

        Args:
            latitude: Decimal latitude
            longitude: Decimal longitude

        Returns:
            Address components of the first result, or None
        """
        if not self.api_key:
            return None

        params = {
            "q": f"{latitude},{longitude}",
            "api_key": self.api_key,
        }

        try:
            response = self.session.get(self.reverse_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Reverse geocoding failed: {e}")
            return None

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            logger.info(f"No reverse geocoding results for ({latitude}, {longitude})")
            return None

        first = results[0] if isinstance(results, list) else None
        components = first.get("address_components") if isinstance(first, dict) else None
        if not components:
            logger.info("Address components not found in the result")
            return None

        try:
            return AddressComponents.model_validate(components)
        except ValidationError as e:
            logger.error(f"Unexpected address components from Geocodio: {e}")
            return None
