"""HTTP client for the Google Geocoding API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from ...config import settings
from ...errors import (
    GeocodeNotFoundError,
    GeocoderNotConfiguredError,
    GeocodeUpstreamError,
)
from ...models.domain import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeocodeMatch:
    point: GeoPoint
    label: str


class Geocoder(Protocol):
    async def lookup(self, address: str) -> GeocodeMatch: ...

    async def geocode(self, address: str) -> GeoPoint: ...


class GoogleGeocoder:
    """Resolves addresses with retries on transient HTTP failures.

    Retrying lives here rather than in the optimizer: a caller only ever sees a
    point or a :class:`GeocodingError`.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        self.base_url = base_url or settings.geocode_base_url
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocode_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocode_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        )

    async def _fetch(self, address: str) -> dict:
        params = {"address": address, "key": self.api_key}
        attempt = 0
        async with self._get_client() as client:
            while True:
                try:
                    response = await client.get(self.base_url, params=params)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    attempt += 1
                    if status_code < 500 or attempt > self.max_retries:
                        raise GeocodeUpstreamError(
                            f"Geocoding failed {status_code} for: {address}", address=address
                        ) from e
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise GeocodeUpstreamError(
                            f"Geocoding service unreachable for: {address} ({e})", address=address
                        ) from e
                except ValueError as e:
                    raise GeocodeUpstreamError(
                        f"Invalid geocode response for: {address}", address=address
                    ) from e
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(
                    f"Geocoding retry in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}) for '{address}'"
                )
                await asyncio.sleep(wait_time)

    async def lookup(self, address: str) -> GeocodeMatch:
        if not self.api_key:
            raise GeocoderNotConfiguredError("Google Maps API key not configured", address=address)

        data = await self._fetch(address)
        status = data.get("status")
        results = data.get("results") or []
        if status == "ZERO_RESULTS" or (status == "OK" and not results):
            raise GeocodeNotFoundError(f"No geocode result for: {address}", address=address)
        if status != "OK":
            message = data.get("error_message") or status or "unknown status"
            raise GeocodeUpstreamError(f"Geocoding failed for: {address} ({message})", address=address)

        first = results[0]
        location = (first.get("geometry") or {}).get("location") or {}
        lat = location.get("lat")
        lng = location.get("lng")
        if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
            raise GeocodeUpstreamError(f"Invalid geocode response for: {address}", address=address)

        return GeocodeMatch(
            point=GeoPoint(lat=float(lat), lon=float(lng)),
            label=first.get("formatted_address") or address,
        )

    async def geocode(self, address: str) -> GeoPoint:
        match = await self.lookup(address)
        return match.point


def get_geocoder() -> Geocoder:
    return GoogleGeocoder()
