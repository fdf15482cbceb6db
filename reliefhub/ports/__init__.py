"""
Port interfaces for ReliefHub hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .cache import CachePort
from .providers import GeocodingProvider, ReportSource, SeedDataset, UpdateSource

__all__ = ["CachePort", "GeocodingProvider", "ReportSource", "SeedDataset", "UpdateSource"]
