"""
Google Maps Geocoding API adapter for ReliefHub.
"""

from typing import Any, Dict
import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.core.errors import ProviderError
from reliefhub.core.models import Address, Coordinate

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleMapsGeocoder(HttpAdapter):
    """Google Maps geocoder (paid, key required)"""

    name = "google_maps"

    def __init__(self, session: aiohttp.ClientSession, api_key: str, timeout_sec: float = 5.0):
        super().__init__(session, timeout_sec)
        self.api_key = api_key

    async def _geocode(self, params: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request(GEOCODE_URL, params={**params, "key": self.api_key})
        status = data.get("status") if isinstance(data, dict) else None
        if status != "OK" or not data.get("results"):
            raise ProviderError(self.name, f"API status {status}")
        return data["results"][0]

    async def forward(self, location: str) -> Coordinate:
        result = await self._geocode({"address": location})
        point = result["geometry"]["location"]
        return Coordinate(
            lat=float(point["lat"]),
            lng=float(point["lng"]),
            formatted_address=result.get("formatted_address", ""),
            source=self.name,
        )

    async def reverse(self, lat: float, lng: float) -> Address:
        result = await self._geocode({"latlng": f"{lat},{lng}"})
        return Address(
            formatted_address=result.get("formatted_address", ""),
            components=result.get("address_components"),
            source=self.name,
        )
