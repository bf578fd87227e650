"""
Tests for the outbound Geocodio and Cloudinary clients

The ``requests`` session is replaced with a MagicMock, so no network
access happens.
"""

import hashlib
from unittest.mock import MagicMock

import pytest
import requests

from geostamp.core.config import Settings
from geostamp.services.geocoding import GeocodioClient
from geostamp.services.hosting import CloudinaryClient, HostingError, sign_params


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


# =============================================================================
# GEOCODIO
# =============================================================================

GEOCODIO_PAYLOAD = {
    "results": [
        {
            "address_components": {
                "number": "20",
                "predirectional": "W",
                "street": "34th",
                "suffix": "St",
                "formatted_street": "W 34th St",
                "city": "New York",
                "county": "New York County",
                "state": "NY",
                "zip": "10001",
                "country": "US",
            },
            "formatted_address": "20 W 34th St, New York, NY 10001",
            "accuracy": 1,
        }
    ]
}


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def geocoder(session):
    return GeocodioClient(
        api_key="key",
        reverse_url="https://api.geocod.io/v1.7/reverse",
        timeout=5,
        session=session,
    )


class TestGeocodioClient:
    """Tests for reverse geocoding and its soft failures."""

    def test_first_result_components(self, geocoder, session):
        session.get.return_value = _response(GEOCODIO_PAYLOAD)

        address = geocoder.reverse_geocode(40.7128, -74.006)

        assert address.number == "20"
        assert address.formatted_street == "W 34th St"
        assert address.zip == "10001"
        session.get.assert_called_once_with(
            "https://api.geocod.io/v1.7/reverse",
            params={"q": "40.7128,-74.006", "api_key": "key"},
            timeout=5,
        )

    def test_numeric_fields_coerced(self, geocoder, session):
        session.get.return_value = _response(
            {"results": [{"address_components": {"number": 20, "zip": 10001}}]}
        )
        address = geocoder.reverse_geocode(1, 2)
        assert address.number == "20"
        assert address.zip == "10001"

    @pytest.mark.parametrize("payload", [
        {"results": []},
        {},
        {"results": [{"formatted_address": "somewhere"}]},
        {"results": [{"address_components": {}}]},
        ["unexpected"],
    ])
    def test_empty_or_unexpected_payload(self, geocoder, session, payload):
        session.get.return_value = _response(payload)
        assert geocoder.reverse_geocode(0, 0) is None

    def test_connection_error(self, geocoder, session):
        session.get.side_effect = requests.ConnectionError("down")
        assert geocoder.reverse_geocode(0, 0) is None

    def test_http_error(self, geocoder, session):
        session.get.return_value = _response(status_error=requests.HTTPError("403"))
        assert geocoder.reverse_geocode(0, 0) is None

    def test_invalid_json(self, geocoder, session):
        session.get.return_value = _response(json_error=ValueError("not json"))
        assert geocoder.reverse_geocode(0, 0) is None

    def test_without_api_key_does_not_call(self, session):
        client = GeocodioClient(api_key="", reverse_url="https://x", session=session)
        assert client.reverse_geocode(40.7, -74.0) is None
        session.get.assert_not_called()


# =============================================================================
# CLOUDINARY
# =============================================================================

class TestSignParams:
    """Tests for Cloudinary request signing."""

    def test_sorted_and_suffixed_with_secret(self):
        expected = hashlib.sha1(b"folder=weweb&timestamp=1315060510abcd").hexdigest()
        assert sign_params({"timestamp": "1315060510", "folder": "weweb"}, "abcd") == expected

    def test_empty_values_skipped(self):
        assert sign_params({"timestamp": "1", "folder": ""}, "s") == sign_params({"timestamp": "1"}, "s")


@pytest.fixture
def staged_file(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff fake jpeg")
    return path


@pytest.fixture
def host(session):
    return CloudinaryClient(
        cloud_name="demo",
        api_key="123",
        api_secret="secret",
        upload_url="https://api.cloudinary.com/v1_1/demo/image/upload",
        folder="weweb",
        timeout=5,
        session=session,
        clock=lambda: 1700000000.5,
    )


class TestCloudinaryClient:
    """Tests for signed uploads."""

    def test_upload_returns_secure_url(self, host, session, staged_file):
        session.post.return_value = _response({"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/weweb/photo.jpg"})

        url = host.upload(staged_file)

        assert url == "https://res.cloudinary.com/demo/image/upload/v1/weweb/photo.jpg"
        args, kwargs = session.post.call_args
        assert args == ("https://api.cloudinary.com/v1_1/demo/image/upload",)
        assert kwargs["data"] == {
            "timestamp": "1700000000",
            "folder": "weweb",
            "api_key": "123",
            "signature": sign_params({"timestamp": "1700000000", "folder": "weweb"}, "secret"),
        }
        assert kwargs["files"]["file"][0] == "photo.jpg"
        assert kwargs["timeout"] == 5

    def test_request_failure(self, host, session, staged_file):
        session.post.side_effect = requests.Timeout("slow")
        with pytest.raises(HostingError):
            host.upload(staged_file)

    def test_http_error(self, host, session, staged_file):
        session.post.return_value = _response(status_error=requests.HTTPError("401"))
        with pytest.raises(HostingError):
            host.upload(staged_file)

    def test_missing_secure_url(self, host, session, staged_file):
        session.post.return_value = _response({"error": {"message": "Invalid Signature"}})
        with pytest.raises(HostingError):
            host.upload(staged_file)

    def test_missing_file(self, host, session, tmp_path):
        with pytest.raises(HostingError):
            host.upload(tmp_path / "gone.jpg")
        session.post.assert_not_called()

    def test_missing_credentials(self, session, staged_file):
        client = CloudinaryClient("", "", "", upload_url="https://x", session=session)
        with pytest.raises(HostingError):
            client.upload(staged_file)
        session.post.assert_not_called()


# =============================================================================
# SETTINGS
# =============================================================================

def test_collaborator_urls_from_settings():
    settings = Settings(
        CLOUDINARY_CLOUD_NAME="acme",
        GEOCODIO_BASE_URL="https://api.geocod.io/",
        GEOCODIO_API_VERSION="1.9",
    )
    assert settings.cloudinary_upload_url == "https://api.cloudinary.com/v1_1/acme/image/upload"
    assert settings.geocodio_reverse_url == "https://api.geocod.io/v1.9/reverse"


def test_cors_origins_list():
    settings = Settings(CORS_ORIGINS="http://localhost:3000, https://app.example.com")
    assert settings.cors_origins_list == ["http://localhost:3000", "https://app.example.com"]
