"""Request and response schemas for the HTTP layer.

JSON field names are camelCase to stay compatible with existing
clients; attributes are snake_case and mapped through aliases.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from geostamp.models.geo import AddressComponents


class DeviceReport(BaseModel):
    """Location and time reported by the uploading device.

    ``exif_address`` and ``exif_date_time`` echo the ``address`` and
    ``dateTime`` returned by a previous upload, when the image had them.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Device latitude")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Device longitude")
    timestamp: Optional[str] = Field(None, description="Device time, already formatted for display")
    file: str = Field(..., min_length=1, description="Hosted image URL to overlay")
    exif_address: Optional[AddressComponents] = Field(
        None,
        validation_alias=AliasChoices("exifAddress", "exif_address"),
        description="Address resolved from the image's embedded GPS",
    )
    exif_date_time: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("exifdateTime", "exifDateTime", "exif_date_time"),
        description="Embedded capture time, already formatted for display",
    )

    @field_validator("exif_address", mode="before")
    @classmethod
    def empty_address_is_absent(cls, value):
        # Uploads without an address answer with ""
        return None if value == "" else value

    @property
    def has_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class UploadResult(BaseModel):
    """Response for an image upload."""

    model_config = ConfigDict(populate_by_name=True)

    url_with_overlay: str = Field("", alias="urlWithOverlay")
    url_no_overlay: str = Field(..., alias="urlNoOverlay")
    address: Optional[AddressComponents] = None
    date_time: str = Field("", alias="dateTime")
    lat: Optional[float] = None
    long: Optional[float] = None
    left_label: str = Field(..., alias="leftLabel")


class DeviceLocationResult(BaseModel):
    """Response for a device location report."""

    model_config = ConfigDict(populate_by_name=True)

    url_overlay: str = Field(..., alias="urlOverlay")
    left_label: str = Field(..., alias="leftLabel")
    address: Optional[AddressComponents] = None
