"""
OpenStreetMap Nominatim adapter for ReliefHub.

Nominatim is the open-data fallback: no credential, but its usage
policy requires a descriptive User-Agent.
"""

import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.core.errors import ProviderError
from reliefhub.core.models import Address, Coordinate

SEARCH_URL = "https://nominatim.openstreetmap.org/search"
REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"


class NominatimGeocoder(HttpAdapter):
    """Nominatim geocoder (open data)"""

    name = "nominatim"

    def __init__(self, session: aiohttp.ClientSession, user_agent: str, timeout_sec: float = 5.0):
        super().__init__(session, timeout_sec)
        self.headers = {"User-Agent": user_agent}

    async def forward(self, location: str) -> Coordinate:
        data = await self._request(
            SEARCH_URL,
            params={"q": location, "format": "json", "limit": 1, "accept-language": "en"},
            headers=self.headers,
        )
        if not isinstance(data, list) or not data:
            raise ProviderError(self.name, "no results")
        result = data[0]
        return Coordinate(
            lat=float(result["lat"]),
            lng=float(result["lon"]),
            formatted_address=result.get("display_name", ""),
            source=self.name,
        )

    async def reverse(self, lat: float, lng: float) -> Address:
        data = await self._request(
            REVERSE_URL,
            params={"lat": lat, "lon": lng, "format": "json", "accept-language": "en"},
            headers=self.headers,
        )
        if not isinstance(data, dict) or not data or "error" in data:
            reason = data.get("error") if isinstance(data, dict) else None
            raise ProviderError(self.name, reason or "no results")
        return Address(
            formatted_address=data.get("display_name", ""),
            components=data.get("address"),
            source=self.name,
        )
