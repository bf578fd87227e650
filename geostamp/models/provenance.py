"""Provenance value types.

These are the inputs and output of the provenance label resolver:
facts read from the image itself, evidence supplied by the calling
device, and the pair of source tags printed on the watermark.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from geostamp.models.geo import AddressComponents, GeoCoordinate


class SourceTag(str, enum.Enum):
    """Where a watermark line's data came from."""

    EXIF = "EXIF"
    DEVICE = "DEVICE"
    NONE = "NONE"


class CallContext(str, enum.Enum):
    """Which entry path is asking for a label."""

    EXIF = "EXIF"
    DEVICE = "DEVICE"


@dataclass(frozen=True)
class EmbeddedFacts:
    """Geo and time facts read from an image's embedded metadata.

    Attributes:
        coordinate: Capture location, or None if absent or malformed.
        capture_time: Display-formatted capture time, or None.
    """

    coordinate: Optional[GeoCoordinate] = None
    capture_time: Optional[str] = None

    @classmethod
    def empty(cls) -> "EmbeddedFacts":
        """The degraded value used whenever metadata cannot be read."""
        return cls()


@dataclass(frozen=True)
class EmbeddedEvidence:
    """Embedded-metadata side of a provenance decision.

    The upload path sets ``address`` and ``capture_time``. The device
    path only knows whether the client echoed an embedded address and
    time back, and sets ``has_geo`` and ``has_time`` instead.

    Attributes:
        address: Address resolved from the embedded coordinate.
        capture_time: Display-formatted embedded capture time.
        has_geo: Client reported an embedded address.
        has_time: Client reported an embedded capture time.
    """

    address: Optional[AddressComponents] = None
    capture_time: Optional[str] = None
    has_geo: bool = False
    has_time: bool = False


@dataclass(frozen=True)
class DeviceEvidence:
    """Device-sensor side of a provenance decision."""

    has_geo: bool = False
    has_time: bool = False


@dataclass(frozen=True)
class ProvenancePair:
    """Source tags for the address line and the time line.

    Attributes:
        location: Source of the address printed on the watermark.
        time: Source of the timestamp printed on the watermark.
    """

    location: SourceTag
    time: SourceTag

    def __str__(self) -> str:
        return f"{self.location.value}/{self.time.value}"
