"""
Pytest conftest.py - Shared fixtures and configuration

Provides JPEG fixtures with real EXIF blocks (built with piexif), fake
geocoding/hosting collaborators, and a TestClient wired to them through
FastAPI dependency overrides.
"""

import io
import os
from typing import Any, Dict, List, Optional, Tuple

import pytest
from PIL import Image


def pytest_configure(config):
    """
    Pytest hook: Configure before tests run
    """
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")

    # Settings are read at import time; keep real credentials out of tests
    os.environ["APP_ENV"] = "testing"
    os.environ["CLOUDINARY_CLOUD_NAME"] = "demo"
    os.environ["CLOUDINARY_API_KEY"] = "test-api-key"
    os.environ["CLOUDINARY_API_SECRET"] = "test-api-secret"
    os.environ["GEOCODIO_API_KEY"] = "test-geocodio-key"


# =============================================================================
# IMAGE FIXTURES
# =============================================================================

HOSTED_URL = "https://res.cloudinary.com/demo/image/upload/v1700000000/weweb/abc123.jpg"

# 40° 42' 46" N, 74° 0' 21.6" W (lower Manhattan)
NYC_GPS = {
    "lat": ((40, 1), (42, 1), (46, 1)),
    "lat_ref": "N",
    "lon": ((74, 1), (0, 1), (216, 10)),
    "lon_ref": "W",
}


def make_jpeg(
    gps: Optional[Dict[str, Any]] = None,
    date_time_original: Optional[str] = None,
) -> bytes:
    """
    Build a small JPEG with the given GPS and capture-time tags.

    ``gps`` keys: lat, lat_ref, lon, lon_ref; any may be omitted to
    simulate a camera that wrote an incomplete GPS block.
    """
    import piexif

    image = Image.new("RGB", (64, 48), color="blue")

    gps_ifd = {}
    if gps:
        if "lat_ref" in gps:
            gps_ifd[piexif.GPSIFD.GPSLatitudeRef] = gps["lat_ref"]
        if "lat" in gps:
            gps_ifd[piexif.GPSIFD.GPSLatitude] = gps["lat"]
        if "lon_ref" in gps:
            gps_ifd[piexif.GPSIFD.GPSLongitudeRef] = gps["lon_ref"]
        if "lon" in gps:
            gps_ifd[piexif.GPSIFD.GPSLongitude] = gps["lon"]

    exif_ifd = {}
    if date_time_original is not None:
        exif_ifd[piexif.ExifIFD.DateTimeOriginal] = date_time_original

    exif_dict = {
        "0th": {piexif.ImageIFD.Make: "TestCamera"},
        "Exif": exif_ifd,
        "GPS": gps_ifd,
        "1st": {},
        "thumbnail": None,
    }

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", exif=piexif.dump(exif_dict))
    return buffer.getvalue()


@pytest.fixture
def nyc_jpeg() -> bytes:
    """JPEG with NYC GPS and an Independence Day capture time."""
    return make_jpeg(gps=NYC_GPS, date_time_original="2023:07:04 12:00:00")


@pytest.fixture
def plain_jpeg() -> bytes:
    """JPEG without any EXIF block."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color="red").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def nyc_address():
    from geostamp.models.geo import AddressComponents

    return AddressComponents(
        number="20",
        formatted_street="W 34th St",
        city="New York",
        state="NY",
        zip="10001",
    )


# =============================================================================
# COLLABORATOR FAKES
# =============================================================================

class FakeGeocoder:
    """Records lookups and answers with a fixed address."""

    def __init__(self, address=None):
        self.address = address
        self.calls: List[Tuple[float, float]] = []

    def reverse_geocode(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        return self.address


class FakeHost:
    """Records uploads and returns a fixed hosted URL, or fails."""

    def __init__(self, url: str = HOSTED_URL, error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.uploads: List[str] = []

    def upload(self, file_path):
        self.uploads.append(str(file_path))
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def fake_geocoder(nyc_address) -> FakeGeocoder:
    return FakeGeocoder(nyc_address)


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path):
    """Staging directory, unique per test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def client(fake_geocoder, fake_host, upload_dir):
    """
    TestClient with collaborators and staging directory overridden.

    Overrides are cleared after each test.
    """
    from fastapi.testclient import TestClient

    from geostamp.api.deps import get_geocoder, get_host
    from geostamp.core.config import Settings, get_settings
    from geostamp.main import app

    test_settings = Settings(UPLOAD_DIR=str(upload_dir))

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_geocoder] = lambda: fake_geocoder
    app.dependency_overrides[get_host] = lambda: fake_host

    yield TestClient(app)

    app.dependency_overrides.clear()
