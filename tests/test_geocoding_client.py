import asyncio

import httpx
import pytest

from salestrail.errors import GeocodeNotFoundError, GeocoderNotConfiguredError, GeocodeUpstreamError
from salestrail.models.domain import GeoPoint
from salestrail.services.geocoding.client import GoogleGeocoder

OK_PAYLOAD = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA",
            "geometry": {"location": {"lat": 37.422, "lng": -122.084}},
        }
    ],
}


def _geocoder(handler, **kwargs) -> GoogleGeocoder:
    return GoogleGeocoder(
        api_key="test-key",
        transport=httpx.MockTransport(handler),
        backoff_seconds=0,
        **kwargs,
    )


def test_lookup_returns_point_and_label():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=OK_PAYLOAD)

    match = asyncio.run(_geocoder(handler).lookup("1600 Amphitheatre"))

    assert match.point == GeoPoint(lat=37.422, lon=-122.084)
    assert match.label.startswith("1600 Amphitheatre Pkwy")
    assert seen["address"] == "1600 Amphitheatre"
    assert seen["key"] == "test-key"


def test_zero_results_is_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    with pytest.raises(GeocodeNotFoundError) as excinfo:
        asyncio.run(_geocoder(handler).geocode("Atlantis"))

    assert excinfo.value.address == "Atlantis"


def test_denied_request_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "bad key"})

    with pytest.raises(GeocodeUpstreamError, match="bad key"):
        asyncio.run(_geocoder(handler).geocode("Main St"))


def test_server_errors_are_retried():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=OK_PAYLOAD)

    point = asyncio.run(_geocoder(handler, max_retries=2).geocode("Main St"))

    assert point.lat == pytest.approx(37.422)
    assert calls["count"] == 3


def test_client_errors_are_not_retried():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(403)

    with pytest.raises(GeocodeUpstreamError):
        asyncio.run(_geocoder(handler, max_retries=3).geocode("Main St"))

    assert calls["count"] == 1


def test_missing_location_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "OK", "results": [{"geometry": {}}]})

    with pytest.raises(GeocodeUpstreamError):
        asyncio.run(_geocoder(handler).geocode("Main St"))


def test_missing_api_key_fails_without_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    geocoder = GoogleGeocoder(api_key="", transport=httpx.MockTransport(handler))
    geocoder.api_key = None

    with pytest.raises(GeocoderNotConfiguredError):
        asyncio.run(geocoder.geocode("Main St"))
