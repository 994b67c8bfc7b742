"""Address geocoding helpers."""

from .client import GeocodeMatch, Geocoder, GoogleGeocoder, get_geocoder

__all__ = ["GeocodeMatch", "Geocoder", "GoogleGeocoder", "get_geocoder"]
