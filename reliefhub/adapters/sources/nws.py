"""
National Weather Service alerts adapter for ReliefHub.

Reads active alerts for one area from api.weather.gov (GeoJSON) and
maps CAP severities onto the advisory scale.
"""

from typing import List
import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.errors import ProviderError
from reliefhub.core.models import SourceInfo, Update
from reliefhub.core.normalize import to_update
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.nws")

ALERTS_URL = "https://api.weather.gov/alerts/active"


class NwsAlertsSource(HttpAdapter):
    """Dedicated integration for NWS active alerts"""

    name = "weather"

    def __init__(self, info: SourceInfo, session: aiohttp.ClientSession, *, area: str,
                 user_agent: str, timeout_sec: float = 10.0, max_chars: int = 500,
                 clock: Clock = utc_now):
        super().__init__(session, timeout_sec)
        self.info = info
        self.area = area
        self.headers = {"User-Agent": user_agent, "Accept": "application/geo+json"}
        self.max_chars = max_chars
        self._clock = clock

    async def fetch(self) -> List[Update]:
        data = await self._request(ALERTS_URL, params={"area": self.area}, headers=self.headers)
        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected payload")

        fetched_at = self._clock()
        updates: List[Update] = []
        for feature in data.get("features") or []:
            props = feature.get("properties") or {}
            title = props.get("headline") or props.get("event")
            content = props.get("description") or props.get("instruction")
            if not title or not content:
                continue
            updates.append(to_update({
                "id": props.get("id") or feature.get("id"),
                "source": self.info.name,
                "title": title,
                "content": str(content)[:self.max_chars],
                "url": props.get("@id") or feature.get("id") or self.info.url,
                "published_at": props.get("sent") or props.get("effective"),
                "severity": props.get("severity"),
                "category": "weather",
                "contact": "weather.gov",
            }, source=self.info.name, fetched_at=fetched_at))

        log.info(f"NWS alerts fetched for area {self.area}: {len(updates)}")
        return updates
