"""
Geocoding provider adapters for ReliefHub.
"""

from .google import GoogleMapsGeocoder
from .mapbox import MapboxGeocoder
from .nominatim import NominatimGeocoder

__all__ = ["GoogleMapsGeocoder", "MapboxGeocoder", "NominatimGeocoder"]
