"""Geographic value types.

This module defines the decimal coordinate extracted from image
metadata and the structured postal address returned by the
reverse-geocoding collaborator.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class GeoCoordinate:
    """A point in decimal degrees (WGS 84).

    Attributes:
        latitude: Signed latitude, negative south of the equator.
        longitude: Signed longitude, negative west of Greenwich.
    """

    latitude: float
    longitude: float


class AddressComponents(BaseModel):
    """Structured postal address as reported by Geocodio.

    Field names follow Geocodio's ``address_components`` object so the
    value can be echoed back unchanged by clients on the device-report
    path. Every field is optional.

    Attributes:
        number: House number.
        formatted_street: Street name with its prefix and suffix.
        city: City name.
        state: State abbreviation (e.g., 'NY').
        zip: ZIP code.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    number: Optional[str] = None
    predirectional: Optional[str] = None
    prefix: Optional[str] = None
    street: Optional[str] = None
    suffix: Optional[str] = None
    postdirectional: Optional[str] = None
    formatted_street: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
