"""
Bluesky post search adapter for ReliefHub.
"""

from typing import List, Optional
import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.filters import split_keywords
from reliefhub.core.models import RawReport
from reliefhub.core.normalize import to_raw_report
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.social.bluesky")

SEARCH_POSTS_URL = "https://bsky.social/xrpc/app.bsky.feed.searchPosts"


class BlueskySource(HttpAdapter):
    """Token-gated Bluesky search feed"""

    name = "bluesky"

    def __init__(self, session: aiohttp.ClientSession, access_token: str,
                 timeout_sec: float = 10.0, clock: Clock = utc_now):
        super().__init__(session, timeout_sec)
        self.headers = {"Authorization": f"Bearer {access_token}"}
        self._clock = clock

    async def fetch(self, keywords: Optional[str], disaster_type: Optional[str], limit: int) -> List[RawReport]:
        terms = split_keywords(keywords)
        if disaster_type and disaster_type.strip():
            terms.append(disaster_type.strip().lower())
        query = " ".join(terms) or "disaster"

        data = await self._request(
            SEARCH_POSTS_URL,
            params={"q": query, "limit": min(max(limit, 1), 100), "sort": "latest"},
            headers=self.headers,
        )
        posts = data.get("posts") or []
        fetched_at = self._clock()

        reports = [
            to_raw_report({
                "id": post.get("uri"),
                "post": (post.get("record") or {}).get("text", ""),
                "user": (post.get("author") or {}).get("handle", ""),
                "timestamp": (post.get("record") or {}).get("createdAt") or post.get("indexedAt"),
            }, fetched_at=fetched_at)
            for post in posts
        ]
        log.info(f"Fetched {len(reports)} Bluesky posts for query: {query}")
        return reports
