"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations


class SalesTrailError(Exception):
    """Base class for errors reported to API callers as ``{"error": ...}``."""


class ValidationError(SalesTrailError):
    """The request is malformed or cannot be planned (e.g. fewer than two stops)."""


class GeocodingError(SalesTrailError):
    """An address could not be resolved to coordinates."""

    def __init__(self, message: str, *, address: str | None = None) -> None:
        super().__init__(message)
        self.address = address


class GeocodeNotFoundError(GeocodingError):
    pass


class GeocodeUpstreamError(GeocodingError):
    pass


class GeocoderNotConfiguredError(GeocodingError):
    pass


class NotFoundError(SalesTrailError):
    """A stored record does not exist."""


class InternalError(SalesTrailError):
    """Planning failed for a reason the caller cannot fix; details are only logged."""
