"""Provenance label resolution.

Decides, for each of the two watermark lines, whether its data came
from the image's embedded metadata, from the device, or from nowhere.
The result is printed in the watermark's bottom-left corner as
``"<address source>/<time source>"``.
"""

from geostamp.models.provenance import (
    CallContext,
    DeviceEvidence,
    EmbeddedEvidence,
    ProvenancePair,
    SourceTag,
)

EXIF, DEVICE, NONE = SourceTag.EXIF, SourceTag.DEVICE, SourceTag.NONE


def _resolve_after_upload(embedded: EmbeddedEvidence) -> ProvenancePair:
    # No device report exists yet, so a missing time is expected to
    # come from the device later.
    if embedded.address is not None and embedded.capture_time:
        return ProvenancePair(EXIF, EXIF)
    if embedded.address is not None:
        return ProvenancePair(EXIF, DEVICE)
    if embedded.capture_time:
        return ProvenancePair(NONE, EXIF)
    return ProvenancePair(NONE, DEVICE)


def _resolve_device_report(
    embedded: EmbeddedEvidence,
    device: DeviceEvidence,
) -> ProvenancePair:
    # TODO(product): the device entry path only fills embedded.has_geo and
    # embedded.has_time, never embedded.address, so the first branch and the
    # address half of the fourth cannot fire from HTTP. Confirm whether an
    # echoed exifAddress should count here before changing it.
    if embedded.address is not None and device.has_time:
        return ProvenancePair(EXIF, DEVICE)
    if device.has_geo and embedded.has_time:
        return ProvenancePair(DEVICE, EXIF)
    if device.has_geo and device.has_time:
        return ProvenancePair(DEVICE, DEVICE)
    if embedded.address is not None or embedded.has_time:
        return ProvenancePair(NONE, EXIF)
    return ProvenancePair(NONE, DEVICE)


def resolve_provenance(
    embedded: EmbeddedEvidence,
    device: DeviceEvidence,
    context: CallContext,
) -> ProvenancePair:
    """Resolve the source tag of the address line and of the time line.

    Args:
        embedded: Facts taken from the image's embedded metadata.
        device: Facts reported by the calling device.
        context: Entry path asking for the label. ``EXIF`` right after
            upload, ``DEVICE`` once a device report arrives.

    Returns:
        The resolved ProvenancePair. Unknown contexts resolve to
        ``NONE/DEVICE``.
    """
    if context == CallContext.EXIF:
        return _resolve_after_upload(embedded)
    if context == CallContext.DEVICE:
        return _resolve_device_report(embedded, device)
    return ProvenancePair(NONE, DEVICE)
