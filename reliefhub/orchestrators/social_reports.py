"""
Social reports orchestrator for ReliefHub.

This module walks the social feed chain, classifies and ranks the
reports of the first feed that delivers any, and caches the ranked
list per disaster. A feed that fails or comes back empty hands over
to the next one; the seeded feed closes the chain.
"""

from typing import List, NamedTuple, Optional, Sequence
from reliefhub.common.cache import read_through
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core import cache_keys
from reliefhub.core.classify import process_reports
from reliefhub.core.errors import QueryValidationError
from reliefhub.core.filters import apply_limit
from reliefhub.core.models import Broadcast, RawReport, ReportBatch, ReportsEnvelope, SocialReport
from reliefhub.observability.logging_setup import get_logger, with_context
from reliefhub.observability.metrics import provider_attempts
from reliefhub.ports.cache import CachePort
from reliefhub.ports.providers import ReportSource

log = get_logger("reliefhub.social")

# Page size requested from live feeds.
FETCH_SIZE = 100


class ReportsResult(NamedTuple):
    envelope: ReportsEnvelope
    broadcast: Optional[Broadcast]


class ReportFeed:
    """Social feed classifier and ranker"""

    def __init__(self,
                 chain: Sequence[ReportSource],
                 cache: CachePort,
                 *,
                 ttl_sec: Optional[int] = None,
                 default_limit: int = 20,
                 clock: Clock = utc_now):
        """
        Initializes the feed.

        Args:
            chain: report sources in fallback order, seeded feed last
            cache: cache port
            ttl_sec: TTL for ranked lists, None for the cache default
            default_limit: result size when the caller gives none
            clock: UTC clock
        """
        if not chain:
            raise ValueError("social feed chain is empty")
        self.chain = list(chain)
        self.cache = cache
        self.ttl = ttl_sec
        self.default_limit = default_limit
        self._clock = clock

    async def _first_nonempty(self, keywords: Optional[str], disaster_type: Optional[str]) -> List[RawReport]:
        for source in self.chain:
            try:
                reports = await source.fetch(keywords, disaster_type, FETCH_SIZE)
            except Exception as e:
                provider_attempts.labels(operation="social_reports", provider=source.name, outcome="error").inc()
                log.warning(f"Social feed {source.name} failed, trying next: {e}")
                continue

            if not reports:
                provider_attempts.labels(operation="social_reports", provider=source.name, outcome="empty").inc()
                log.info(f"Social feed {source.name} returned nothing, trying next")
                continue

            provider_attempts.labels(operation="social_reports", provider=source.name, outcome="success").inc()
            log.info(f"Social feed {source.name} returned {len(reports)} reports")
            return reports

        log.warning("Every social feed came back empty")
        return []

    async def _ranked(self, keywords: Optional[str], disaster_type: Optional[str]) -> ReportBatch:
        raw = await self._first_nonempty(keywords, disaster_type)
        now = self._clock()
        return ReportBatch(items=process_reports(raw, keywords, now), last_updated=now)

    async def fetch_reports(self,
                            keywords: Optional[str] = None,
                            disaster_type: Optional[str] = None,
                            limit: Optional[int] = None) -> List[SocialReport]:
        """Returns classified reports ranked by priority then relevance."""
        batch = await self._ranked(keywords, disaster_type)
        return apply_limit(batch.items, self.default_limit if limit is None else limit)

    async def get_reports(self,
                          disaster_id: str,
                          keywords: Optional[str] = None,
                          disaster_type: Optional[str] = None,
                          limit: Optional[int] = None) -> ReportsResult:
        """
        Returns ranked social reports for a disaster.

        The full ranked list is cached and broadcast; `limit` applies to
        the envelope only.

        Args:
            disaster_id: disaster identifier
            keywords: comma-separated search terms
            disaster_type: disaster type, e.g. "flood"
            limit: maximum number of items

        Returns:
            envelope and, after a fresh fetch, the broadcast payload
        """
        if not disaster_id or not disaster_id.strip():
            raise QueryValidationError("disaster id is required")

        with with_context(disaster_id=disaster_id):
            batch, hit = await read_through(
                self.cache,
                cache_keys.social_media_key(disaster_id, keywords, disaster_type),
                ReportBatch,
                lambda: self._ranked(keywords, disaster_type),
                ttl_sec=self.ttl,
                operation="social_reports",
            )
        items = apply_limit(batch.items, self.default_limit if limit is None else limit)
        log.info(f"Social reports for disaster {disaster_id}: {len(items)} (cached={hit})")

        envelope = ReportsEnvelope(
            disaster_id=disaster_id,
            total_count=len(items),
            keywords_used=keywords or None,
            disaster_type=disaster_type or None,
            last_updated=batch.last_updated,
            items=items,
        )
        broadcast = None if hit else Broadcast(disaster_id=disaster_id, data=batch.items)
        return ReportsResult(envelope, broadcast)

    async def preview_reports(self,
                              keywords: Optional[str] = None,
                              disaster_type: Optional[str] = None,
                              limit: Optional[int] = None) -> ReportsEnvelope:
        """Runs the feed pipeline without cache or broadcast."""
        batch = await self._ranked(keywords, disaster_type)
        items = apply_limit(batch.items, self.default_limit if limit is None else limit)
        return ReportsEnvelope(
            total_count=len(items),
            keywords_used=keywords or None,
            disaster_type=disaster_type or None,
            last_updated=batch.last_updated,
            items=items,
        )
