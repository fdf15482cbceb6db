"""
Official updates orchestrator for ReliefHub.

This module fetches advisories from the selected official sources,
merges and ranks them, and applies filters and search behind the
cache. When every source comes back empty the curated dataset is
served instead, flagged as degraded.
"""

import asyncio
from typing import List, Optional, Sequence
from reliefhub.common.cache import read_through
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core import cache_keys
from reliefhub.core.cache_keys import SourceSelection
from reliefhub.core.errors import QueryValidationError
from reliefhub.core.filters import apply_limit, filter_by_category, filter_by_severity, search
from reliefhub.core.models import SourcesCatalogue, Update, UpdateBatch, UpdatesEnvelope
from reliefhub.core.ranking import sort_updates
from reliefhub.observability.logging_setup import get_logger, with_context
from reliefhub.observability.metrics import source_failures, updates_degraded
from reliefhub.ports.cache import CachePort
from reliefhub.ports.providers import SeedDataset, UpdateSource
from reliefhub.settings import Limits

log = get_logger("reliefhub.updates")


class UpdateAggregator:
    """Source aggregator for official updates"""

    def __init__(self,
                 sources: Sequence[UpdateSource],
                 dataset: SeedDataset,
                 cache: CachePort,
                 *,
                 ttl_sec: Optional[int] = None,
                 limits: Optional[Limits] = None,
                 clock: Clock = utc_now):
        """
        Initializes the aggregator.

        Args:
            sources: configured sources in catalogue order
            dataset: curated dataset used on degradation
            cache: cache port
            ttl_sec: TTL for aggregates, None for the cache default
            limits: default result sizes
            clock: UTC clock
        """
        self.sources = list(sources)
        self.dataset = dataset
        self.cache = cache
        self.ttl = ttl_sec
        self.limits = limits or Limits()
        self._clock = clock

    def list_sources(self) -> SourcesCatalogue:
        """Returns the catalogue of configured sources."""
        infos = [source.info for source in self.sources]
        return SourcesCatalogue(available_sources=infos, total_sources=len(infos))

    def _select(self, source_ids: SourceSelection) -> List[UpdateSource]:
        ids = cache_keys.normalize_sources(source_ids)
        if ids == [cache_keys.ALL]:
            return list(self.sources)

        known = {source.info.id for source in self.sources}
        unknown = sorted(set(ids) - known)
        if unknown:
            log.warning(f"Ignoring unknown sources: {unknown}")
        return [source for source in self.sources if source.info.id in ids]

    async def _fetch_one(self, source: UpdateSource) -> List[Update]:
        try:
            updates = await source.fetch()
        except Exception as e:
            source_failures.labels(source=source.info.id).inc()
            log.error(f"Source {source.info.id} failed, contributing nothing: {e}")
            return []
        log.debug(f"Source {source.info.id} returned {len(updates)} updates")
        return updates

    async def collect(self, source_ids: SourceSelection = None) -> UpdateBatch:
        """
        Fetches, merges and ranks updates from the selected sources.

        Sources run concurrently; the merge waits for all of them.

        Args:
            source_ids: ids, comma-separated string, or "all"

        Returns:
            ranked batch, degraded when the curated dataset was substituted
        """
        selected = self._select(source_ids)
        results = await asyncio.gather(*(self._fetch_one(source) for source in selected))
        merged = [update for updates in results for update in updates]
        now = self._clock()

        if not merged:
            updates_degraded.inc()
            log.warning("No official updates from any source, serving curated dataset")
            return UpdateBatch(items=sort_updates(self.dataset.official_updates(now)), degraded=True, last_updated=now)

        ranked = sort_updates(merged)
        log.info(f"Fetched {len(ranked)} official updates from {len(selected)} sources")
        return UpdateBatch(items=ranked, degraded=False, last_updated=now)

    async def fetch_updates(self, source_ids: SourceSelection = None) -> List[Update]:
        """Returns the ranked updates of the selected sources, never empty."""
        return (await self.collect(source_ids)).items

    async def get_updates(self,
                          disaster_id: str,
                          sources: SourceSelection = None,
                          category: Optional[str] = None,
                          severity: Optional[str] = None,
                          keywords: Optional[str] = None,
                          limit: Optional[int] = None) -> UpdatesEnvelope:
        """
        Returns filtered official updates for a disaster.

        Args:
            disaster_id: disaster identifier
            sources: source selection
            category: category filter
            severity: severity filter
            keywords: comma-separated search terms
            limit: maximum number of items, applied after ranking

        Returns:
            updates envelope
        """
        if not disaster_id or not disaster_id.strip():
            raise QueryValidationError("disaster id is required")
        sources_checked = cache_keys.normalize_sources(sources)

        async def compute() -> UpdateBatch:
            batch = await self.collect(sources_checked)
            items = filter_by_category(batch.items, category)
            items = filter_by_severity(items, severity)
            items = search(items, keywords)
            return batch.model_copy(update={"items": items})

        with with_context(disaster_id=disaster_id):
            batch, hit = await read_through(
                self.cache,
                cache_keys.official_updates_key(disaster_id, sources_checked, category, severity, keywords),
                UpdateBatch,
                compute,
                ttl_sec=self.ttl,
                operation="official_updates",
            )
        items = apply_limit(batch.items, self.limits.official_updates if limit is None else limit)
        log.info(f"Official updates for disaster {disaster_id}: {len(items)} (cached={hit})")

        return UpdatesEnvelope(
            disaster_id=disaster_id,
            total_count=len(items),
            sources_checked=sources_checked,
            filters_applied={"category": category or None, "severity": severity or None, "keywords": keywords or None},
            degraded=batch.degraded,
            last_updated=batch.last_updated,
            items=items,
        )

    async def get_updates_by_category(self,
                                      category: str,
                                      sources: SourceSelection = None,
                                      limit: Optional[int] = None) -> UpdatesEnvelope:
        """Returns official updates of one category."""
        if not category or not category.strip():
            raise QueryValidationError("category is required")
        sources_checked = cache_keys.normalize_sources(sources)

        async def compute() -> UpdateBatch:
            batch = await self.collect(sources_checked)
            return batch.model_copy(update={"items": filter_by_category(batch.items, category)})

        batch, hit = await read_through(
            self.cache,
            cache_keys.category_updates_key(category, sources_checked),
            UpdateBatch,
            compute,
            ttl_sec=self.ttl,
            operation="updates_by_category",
        )
        items = apply_limit(batch.items, self.limits.category_updates if limit is None else limit)
        log.info(f"Category updates for {category}: {len(items)} (cached={hit})")

        return UpdatesEnvelope(
            category=category,
            total_count=len(items),
            sources_checked=sources_checked,
            filters_applied={"category": category},
            degraded=batch.degraded,
            last_updated=batch.last_updated,
            items=items,
        )

    async def search_updates(self,
                             query: Optional[str],
                             sources: SourceSelection = None,
                             limit: Optional[int] = None) -> UpdatesEnvelope:
        """
        Searches official updates by keywords.

        Raises:
            QueryValidationError: blank query, before any cache or source access
        """
        if not query or not query.strip():
            raise QueryValidationError("search query is required")
        sources_checked = cache_keys.normalize_sources(sources)

        async def compute() -> UpdateBatch:
            batch = await self.collect(sources_checked)
            return batch.model_copy(update={"items": search(batch.items, query)})

        batch, hit = await read_through(
            self.cache,
            cache_keys.search_updates_key(query, sources_checked),
            UpdateBatch,
            compute,
            ttl_sec=self.ttl,
            operation="search_updates",
        )
        items = apply_limit(batch.items, self.limits.search_results if limit is None else limit)
        log.info(f"Search \"{query}\": {len(items)} results (cached={hit})")

        return UpdatesEnvelope(
            search_query=query,
            total_count=len(items),
            sources_checked=sources_checked,
            filters_applied={"keywords": query},
            degraded=batch.degraded,
            last_updated=batch.last_updated,
            items=items,
        )
