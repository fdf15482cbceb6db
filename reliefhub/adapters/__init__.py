"""
Adapters for ReliefHub hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .storage import SQLiteCache, MemoryCache
from .geocoding import GoogleMapsGeocoder, MapboxGeocoder, NominatimGeocoder
from .sources import CuratedSource, GenericScraper, NwsAlertsSource, ScrapedSource
from .social import TwitterSource, BlueskySource, SeededReportSource
from .seed import CuratedDataset

__all__ = [
    "SQLiteCache", "MemoryCache",
    "GoogleMapsGeocoder", "MapboxGeocoder", "NominatimGeocoder",
    "CuratedSource", "GenericScraper", "NwsAlertsSource", "ScrapedSource",
    "TwitterSource", "BlueskySource", "SeededReportSource",
    "CuratedDataset",
]
