"""
Provider port interfaces.

This module defines the protocols implemented by external data
providers: geocoders, official update sources, social feeds and the
curated seed dataset.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from reliefhub.core.models import Address, Coordinate, RawReport, SourceInfo, Update


class GeocodingProvider(Protocol):
    """Forward and reverse geocoding provider"""

    name: str

    async def forward(self, location: str) -> Coordinate:
        """
        Resolves free text to a coordinate.

        Raises:
            ProviderError: on HTTP failure or empty result
        """
        ...

    async def reverse(self, lat: float, lng: float) -> Address:
        """
        Resolves a coordinate to an address.

        Raises:
            ProviderError: on HTTP failure or empty result
        """
        ...


class UpdateSource(Protocol):
    """Official update source"""

    info: SourceInfo

    async def fetch(self) -> List[Update]:
        """Fetches the source's current updates."""
        ...


class ReportSource(Protocol):
    """Social report feed"""

    name: str

    async def fetch(self, keywords: Optional[str], disaster_type: Optional[str], limit: int) -> List[RawReport]:
        """Fetches raw posts matching the query."""
        ...


class SeedDataset(Protocol):
    """Curated default data used when live sources give nothing"""

    def official_updates(self, now: datetime) -> List[Update]:
        ...

    def social_reports(self, now: datetime) -> List[RawReport]:
        ...
