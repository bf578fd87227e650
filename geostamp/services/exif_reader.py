"""
EXIF Reader - Geo and Time Facts from Embedded Metadata
=======================================================

Reads the two facts the watermark needs from a photo's EXIF block:
where it was taken (GPS IFD) and when (``DateTimeOriginal``).

How GPS is Stored in EXIF:
-------------------------
GPS coordinates are stored as three rationals plus a hemisphere letter:
```
GPSLatitudeRef: 'N'                  # North or South
GPSLatitude: (40, 42, 46)            # 40° 42' 46"
GPSLongitudeRef: 'W'                 # West or East
GPSLongitude: (74, 0, 21.6)          # 74° 0' 21.6"
```

Converted to decimal degrees:
- 40° 42' 46" N   =  40.712778
- 74° 0' 21.6" W  = -74.006

Reading never fails the caller. A file that cannot be opened, has no
EXIF block, or carries malformed tags produces ``EmbeddedFacts.empty()``
or an ``EmbeddedFacts`` with only the fields that could be read.
"""

import io
import logging
import math
import re
from datetime import datetime
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Optional, Sequence, Union

from fastapi.concurrency import run_in_threadpool
from PIL import ExifTags, Image

from geostamp.models.geo import GeoCoordinate
from geostamp.models.provenance import EmbeddedFacts

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO]

EXIF_DATETIME_PATTERN = re.compile(r"(\d{4}):(\d{2}):(\d{2}) (\d{2}):(\d{2}):(\d{2})")

DISPLAY_FORMAT = "%m/%d/%y %I:%M %p"

NEGATIVE_REFERENCES = {"S", "W"}
LATITUDE_REFERENCES = {"N", "S"}
LONGITUDE_REFERENCES = {"E", "W"}


def _rational_to_float(value: Any) -> float:
    """Convert an EXIF rational to float.

    Pillow returns ``IFDRational`` objects; older EXIF writers and some
    decoders still hand back ``(numerator, denominator)`` pairs.

    An ``IFDRational`` with a zero denominator converts to ``nan``
    instead of raising, so non-finite results are rejected here.
    """
    if isinstance(value, (tuple, list)):
        numerator, denominator = value
        result = numerator / denominator
    else:
        result = float(value)

    if not math.isfinite(result):
        raise ValueError(f"Non-finite EXIF rational: {value!r}")
    return result


def dms_to_decimal(dms: Sequence[Any], reference: str) -> float:
    """
    Convert degrees/minutes/seconds to signed decimal degrees.

    Math:
    ----
    decimal = degrees + minutes/60 + seconds/3600

    The result is negated for the southern and western hemispheres.
    No rounding is applied.

    Args:
        dms: Three components (degrees, minutes, seconds). Each may be a
            number, an ``IFDRational`` or a ``(num, den)`` pair.
        reference: Hemisphere letter, one of N, S, E, W.

    Returns:
        Decimal degrees as float.

    Raises:
        ValueError: If ``dms`` does not have exactly three components,
            or a component is not finite.
        ZeroDivisionError: If a rational has a zero denominator.

    Example:
        >>> dms_to_decimal((40, 42, 46), "N")
        40.71277777777778
    """
    if len(dms) != 3:
        raise ValueError(f"Expected 3 DMS components, got {len(dms)}")

    degrees, minutes, seconds = (_rational_to_float(part) for part in dms)
    decimal = degrees + (minutes / 60) + (seconds / 3600)

    return -decimal if reference in NEGATIVE_REFERENCES else decimal


def format_exif_datetime(value: Any) -> Optional[str]:
    """
    Format an EXIF datetime string for display.

    EXIF uses ``YYYY:MM:DD HH:MM:SS`` (colons in the date part). The
    value carries no timezone, so it is read as local time of this
    process and rendered as ``MM/DD/YY HH:MM AM|PM``.

    Args:
        value: Raw ``DateTimeOriginal`` value.

    Returns:
        Display string, or None if the value does not contain the EXIF
        pattern or names an impossible date.
    """
    if not isinstance(value, str):
        return None

    match = EXIF_DATETIME_PATTERN.search(value)
    if not match:
        return None

    try:
        parsed = datetime(*(int(part) for part in match.groups()))
    except ValueError:
        logger.debug(f"EXIF datetime out of range: {value!r}")
        return None

    return parsed.strftime(DISPLAY_FORMAT)


def _normalize_reference(value: Any) -> Optional[str]:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    if not isinstance(value, str):
        return None
    value = value.strip("\x00 ").upper()
    return value or None


def parse_gps_info(gps_info: Mapping[int, Any]) -> Optional[GeoCoordinate]:
    """
    Parse a GPS IFD into a decimal coordinate.

    Both axes need their DMS triple and their hemisphere reference;
    if any of the four tags is missing or malformed, no coordinate is
    returned (never a partial one).

    Args:
        gps_info: GPS IFD mapping keyed by ``ExifTags.GPS`` tag ids.

    Returns:
        GeoCoordinate, or None.
    """
    lat_dms = gps_info.get(ExifTags.GPS.GPSLatitude)
    lon_dms = gps_info.get(ExifTags.GPS.GPSLongitude)
    lat_ref = _normalize_reference(gps_info.get(ExifTags.GPS.GPSLatitudeRef))
    lon_ref = _normalize_reference(gps_info.get(ExifTags.GPS.GPSLongitudeRef))

    if lat_dms is None or lon_dms is None:
        return None
    if lat_ref not in LATITUDE_REFERENCES or lon_ref not in LONGITUDE_REFERENCES:
        logger.debug(f"Missing or invalid GPS references: {lat_ref!r}, {lon_ref!r}")
        return None

    try:
        return GeoCoordinate(
            latitude=dms_to_decimal(lat_dms, lat_ref),
            longitude=dms_to_decimal(lon_dms, lon_ref),
        )
    except (TypeError, ValueError, ZeroDivisionError) as e:
        logger.warning(f"Failed to parse GPS data: {e}")
        return None


def _open_image(source: ImageSource) -> Image.Image:
    if isinstance(source, bytes):
        return Image.open(io.BytesIO(source))
    return Image.open(source)


def extract_embedded_facts(source: ImageSource) -> EmbeddedFacts:
    """
    Read GPS coordinate and capture time from an image.

    Args:
        source: Path, raw bytes, or binary file object.

    Returns:
        EmbeddedFacts; empty when the image or its metadata is unreadable.
    """
    try:
        with _open_image(source) as image:
            exif = image.getexif()
            gps_info = exif.get_ifd(ExifTags.IFD.GPSInfo)
            exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
    except Exception as e:
        logger.warning(f"EXIF read error: {e}")
        return EmbeddedFacts.empty()

    coordinate = parse_gps_info(gps_info) if gps_info else None
    capture_time = format_exif_datetime(exif_ifd.get(ExifTags.Base.DateTimeOriginal))

    if coordinate is None and capture_time is None:
        logger.debug("No usable GPS or time tags found in image")

    return EmbeddedFacts(coordinate=coordinate, capture_time=capture_time)


async def read_embedded_facts(source: ImageSource) -> EmbeddedFacts:
    """Awaitable ``extract_embedded_facts``; always resolves, never raises."""
    return await run_in_threadpool(extract_embedded_facts, source)
