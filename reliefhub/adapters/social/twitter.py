"""
X (Twitter) API v2 Recent Search adapter for ReliefHub.
"""

from typing import Any, Dict, List, Optional
import aiohttp
from reliefhub.adapters.http_client import HttpAdapter
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.filters import split_keywords
from reliefhub.core.models import RawReport
from reliefhub.core.normalize import to_raw_report
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.social.x")

RECENT_SEARCH_URL = "https://api.twitter.com/2/tweets/search/recent"

# Fields we always request.
TWEET_FIELDS = "created_at,author_id,geo"
EXPANSIONS = "author_id"
USER_FIELDS = "username,verified,location"

DEFAULT_QUERY = "(disaster OR emergency)"


def build_query(keywords: Optional[str], disaster_type: Optional[str]) -> str:
    """Builds an X search query: any keyword, plus the disaster type, originals only."""
    parts: List[str] = []
    terms = [f'"{t}"' if " " in t else t for t in split_keywords(keywords)]
    if terms:
        parts.append(f"({' OR '.join(terms)})" if len(terms) > 1 else terms[0])
    if disaster_type and disaster_type.strip():
        parts.append(disaster_type.strip().lower())
    if not parts:
        parts.append(DEFAULT_QUERY)
    parts.append("-is:retweet")
    return " ".join(parts)


class TwitterSource(HttpAdapter):
    """Token-gated X recent search feed"""

    name = "twitter"

    def __init__(self, session: aiohttp.ClientSession, bearer_token: str,
                 timeout_sec: float = 10.0, clock: Clock = utc_now):
        super().__init__(session, timeout_sec)
        self.headers = {"Authorization": f"Bearer {bearer_token}"}
        self._clock = clock

    async def fetch(self, keywords: Optional[str], disaster_type: Optional[str], limit: int) -> List[RawReport]:
        query = build_query(keywords, disaster_type)
        params: Dict[str, Any] = {
            "query": query,
            "max_results": min(max(limit, 10), 100),
            "tweet.fields": TWEET_FIELDS,
            "expansions": EXPANSIONS,
            "user.fields": USER_FIELDS,
        }
        data = await self._request(RECENT_SEARCH_URL, params=params, headers=self.headers)

        tweets: List[Dict[str, Any]] = data.get("data") or []
        if not tweets:
            log.info(f"No results for query: {query}")
            return []

        # author-id -> user map from expansions
        users = {u["id"]: u for u in (data.get("includes") or {}).get("users", [])}
        fetched_at = self._clock()

        reports = []
        for tweet in tweets:
            author = users.get(str(tweet.get("author_id", "")), {})
            reports.append(to_raw_report({
                "id": tweet.get("id"),
                "post": tweet.get("text", ""),
                "user": author.get("username", ""),
                "timestamp": tweet.get("created_at"),
                "verified": author.get("verified", False),
                "location": author.get("location"),
            }, fetched_at=fetched_at))

        log.info(f"Fetched {len(reports)} posts for query: {query}")
        return reports
