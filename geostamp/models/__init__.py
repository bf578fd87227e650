from geostamp.models.geo import AddressComponents, GeoCoordinate
from geostamp.models.provenance import (
    CallContext,
    DeviceEvidence,
    EmbeddedEvidence,
    EmbeddedFacts,
    ProvenancePair,
    SourceTag,
)
from geostamp.models.schemas import DeviceLocationResult, DeviceReport, UploadResult

__all__ = [
    "AddressComponents",
    "CallContext",
    "DeviceEvidence",
    "DeviceLocationResult",
    "DeviceReport",
    "EmbeddedEvidence",
    "EmbeddedFacts",
    "GeoCoordinate",
    "ProvenancePair",
    "SourceTag",
    "UploadResult",
]
