"""
Mapbox Places geocoding adapter for ReliefHub.
"""

from typing import Any, Dict
from urllib.parse import quote
import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.core.errors import ProviderError
from reliefhub.core.models import Address, Coordinate

PLACES_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json"


class MapboxGeocoder(HttpAdapter):
    """Mapbox geocoder (paid, access token required)"""

    name = "mapbox"

    def __init__(self, session: aiohttp.ClientSession, access_token: str, timeout_sec: float = 5.0):
        super().__init__(session, timeout_sec)
        self.access_token = access_token

    async def _first_feature(self, query: str) -> Dict[str, Any]:
        data = await self._request(
            PLACES_URL.format(query=quote(query, safe=",")),
            params={"access_token": self.access_token, "limit": 1},
        )
        features = data.get("features") if isinstance(data, dict) else None
        if not features:
            raise ProviderError(self.name, "no results")
        return features[0]

    async def forward(self, location: str) -> Coordinate:
        feature = await self._first_feature(location)
        # Mapbox centers are [lng, lat]
        lng, lat = feature["center"]
        return Coordinate(
            lat=float(lat),
            lng=float(lng),
            formatted_address=feature.get("place_name", ""),
            source=self.name,
        )

    async def reverse(self, lat: float, lng: float) -> Address:
        feature = await self._first_feature(f"{lng},{lat}")
        return Address(
            formatted_address=feature.get("place_name", ""),
            components=feature.get("context"),
            source=self.name,
        )
