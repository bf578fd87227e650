"""Watermark endpoints.

``POST /upload`` takes a photo (multipart field ``filepond``), hosts it
and returns its URL with and without the provenance overlay.
``POST /device-location`` re-labels an already-hosted photo once the
device has reported its own location and time.
"""

import logging

from fastapi import APIRouter, File, UploadFile

from geostamp.api.deps import AppSettings, Geocoder, ImageHost
from geostamp.core.exceptions import DeviceLocationException, ImageHostingException
from geostamp.models.schemas import DeviceLocationResult, DeviceReport, UploadResult
from geostamp.services.hosting import HostingError
from geostamp.services.pipeline import process_device_report, process_upload
from geostamp.services.staging import discard_staged, stage_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Watermark"])


@router.post(
    "/upload",
    response_model=UploadResult,
    summary="Upload Photo",
    description="Host a photo and overlay its embedded location and time.",
)
async def upload_photo(
    settings: AppSettings,
    geocoder: Geocoder,
    host: ImageHost,
    filepond: UploadFile = File(..., description="Photo to watermark"),
) -> UploadResult:
    """Host an uploaded photo and compose its overlay URL.

    Args:
        settings: Application settings.
        geocoder: Reverse-geocoding client.
        host: Image hosting client.
        filepond: Uploaded photo.

    Returns:
        Hosted URLs, embedded facts and the provenance label.

    Raises:
        ValidationException: If the upload is empty or too large.
        ImageHostingException: If the image host upload fails.
    """
    path = await stage_upload(filepond, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
    try:
        return await process_upload(path, geocoder, host)
    except HostingError as e:
        logger.error(f"Image hosting upload failed: {e}")
        raise ImageHostingException(details={"filename": filepond.filename}) from e
    finally:
        discard_staged(path)


@router.post(
    "/device-location",
    response_model=DeviceLocationResult,
    summary="Device Location",
    description="Overlay device-reported location and time on a hosted photo.",
)
async def device_location(
    report: DeviceReport,
    geocoder: Geocoder,
) -> DeviceLocationResult:
    """Compose the overlay URL for a device location report.

    Args:
        report: Device location, time and hosted image URL.
        geocoder: Reverse-geocoding client.

    Returns:
        Overlay URL, provenance label and device address.

    Raises:
        DeviceLocationException: If the report cannot be processed.
    """
    logger.info(f"Device report: {report.model_dump(exclude_none=True)}")
    try:
        return await process_device_report(report, geocoder)
    except Exception as e:
        logger.error(f"Error processing device location: {e}")
        raise DeviceLocationException() from e
