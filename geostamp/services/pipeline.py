"""
Watermark Pipelines
===================

The two entry paths of the service, each run sequentially within one
request:

1. **Upload**: read embedded facts, reverse-geocode the embedded
   coordinate, label the watermark lines, host the image, and compose
   the overlay URL.
2. **Device report**: the client later sends the device's own location
   and time for an already-hosted image; label the lines again, pick
   the best address and time, and compose the overlay URL.

Blocking work (Pillow parsing, ``requests`` calls) runs in Starlette's
threadpool.
"""

import logging
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from geostamp.models.provenance import CallContext, DeviceEvidence, EmbeddedEvidence
from geostamp.models.schemas import DeviceLocationResult, DeviceReport, UploadResult
from geostamp.services.exif_reader import read_embedded_facts
from geostamp.services.geocoding import GeocodioClient
from geostamp.services.hosting import CloudinaryClient
from geostamp.services.overlay import compose_overlay_url
from geostamp.services.provenance import resolve_provenance
from geostamp.services.watermark import build_watermark_string

logger = logging.getLogger(__name__)


async def process_upload(
    image_path: Path,
    geocoder: GeocodioClient,
    host: CloudinaryClient,
) -> UploadResult:
    """
    Label, host and watermark an uploaded image.

    Args:
        image_path: Staged upload.
        geocoder: Reverse-geocoding client.
        host: Image hosting client.

    Returns:
        UploadResult. ``url_with_overlay`` is empty when the image has
        no usable GPS coordinate.

    Raises:
        HostingError: If the image host upload fails.
    """
    facts = await read_embedded_facts(image_path)
    logger.info(f"Extracted EXIF data: {facts}")

    address = None
    if facts.coordinate:
        address = await run_in_threadpool(
            geocoder.reverse_geocode,
            facts.coordinate.latitude,
            facts.coordinate.longitude,
        )
    else:
        logger.info("No coordinates found or error in extraction")

    label = resolve_provenance(
        EmbeddedEvidence(address=address, capture_time=facts.capture_time),
        DeviceEvidence(),
        CallContext.EXIF,
    )
    logger.info(f"Left label: {label}")

    hosted_url = await run_in_threadpool(host.upload, image_path)

    if not facts.coordinate:
        return UploadResult(
            url_no_overlay=hosted_url,
            date_time=facts.capture_time or "",
            left_label=str(label),
        )

    watermark = build_watermark_string(address, facts.capture_time)
    url_with_overlay = compose_overlay_url(hosted_url, str(label), watermark)
    logger.debug(f"Overlay URL: {url_with_overlay}")

    return UploadResult(
        url_with_overlay=url_with_overlay,
        url_no_overlay=hosted_url,
        address=address,
        date_time=facts.capture_time or "",
        lat=facts.coordinate.latitude,
        long=facts.coordinate.longitude,
        left_label=str(label),
    )


async def process_device_report(
    report: DeviceReport,
    geocoder: GeocodioClient,
) -> DeviceLocationResult:
    """
    Watermark an already-hosted image using the device's report.

    The echoed embedded address and time win over the device's own;
    the response's ``address`` is always the device-coordinate address.

    Args:
        report: Device location/time plus echoed embedded facts.
        geocoder: Reverse-geocoding client.

    Returns:
        DeviceLocationResult.
    """
    embedded = EmbeddedEvidence(
        has_geo=report.exif_address is not None,
        has_time=bool(report.exif_date_time),
    )
    device = DeviceEvidence(
        has_geo=report.has_coordinate,
        has_time=bool(report.timestamp),
    )
    label = resolve_provenance(embedded, device, CallContext.DEVICE)
    logger.info(f"Left label: {label}")

    device_address = None
    if report.has_coordinate:
        device_address = await run_in_threadpool(
            geocoder.reverse_geocode,
            report.latitude,
            report.longitude,
        )

    final_address = report.exif_address or device_address
    final_time = report.exif_date_time or report.timestamp

    watermark = build_watermark_string(final_address, final_time)
    url_overlay = compose_overlay_url(report.file, str(label), watermark)
    logger.debug(f"Overlay URL: {url_overlay}")

    return DeviceLocationResult(
        url_overlay=url_overlay,
        left_label=str(label),
        address=device_address,
    )
