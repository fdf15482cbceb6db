"""
Application assembly for ReliefHub.

Resolves which providers and sources are usable from the settings,
once, and wires them into the orchestrators. The `Hub` owns the shared
HTTP session and the cache for the lifetime of the application.
"""

from typing import List, Optional, Sequence
import aiohttp
from reliefhub.adapters.geocoding import GoogleMapsGeocoder, MapboxGeocoder, NominatimGeocoder
from reliefhub.adapters.seed import CuratedDataset
from reliefhub.adapters.social import BlueskySource, SeededReportSource, TwitterSource
from reliefhub.adapters.sources import CuratedSource, GenericScraper, NwsAlertsSource, ScrapedSource
from reliefhub.adapters.sources.catalogue import SOURCE_CATALOGUE
from reliefhub.adapters.storage import MemoryCache, SQLiteCache
from reliefhub.core.models import SourceInfo
from reliefhub.observability.logging_setup import get_logger
from reliefhub.orchestrators import GeocodingResolver, ReportFeed, UpdateAggregator
from reliefhub.ports.cache import CachePort
from reliefhub.ports.providers import GeocodingProvider, ReportSource, SeedDataset, UpdateSource
from reliefhub.settings import Settings

log = get_logger("reliefhub.bootstrap")


def build_geocoding_chain(order: Sequence[str], settings: Settings,
                          session: aiohttp.ClientSession) -> List[GeocodingProvider]:
    """
    Builds a geocoding chain in the given order.

    Providers whose credential is missing, and unknown names, are left out.

    Args:
        order: provider names in priority order
        settings: application settings
        session: shared HTTP session

    Returns:
        usable providers in priority order
    """
    cfg = settings.geocoding
    chain: List[GeocodingProvider] = []
    for name in order:
        if name == "google_maps":
            if not cfg.google_maps_api_key:
                log.info("Google Maps geocoder disabled: no API key")
                continue
            chain.append(GoogleMapsGeocoder(session, cfg.google_maps_api_key, cfg.timeout_sec))
        elif name == "mapbox":
            if not cfg.mapbox_access_token:
                log.info("Mapbox geocoder disabled: no access token")
                continue
            chain.append(MapboxGeocoder(session, cfg.mapbox_access_token, cfg.timeout_sec))
        elif name == "nominatim":
            chain.append(NominatimGeocoder(session, cfg.user_agent, cfg.timeout_sec))
        else:
            log.warning(f"Unknown geocoding provider ignored: {name}")
    return chain


def build_update_sources(settings: Settings, session: aiohttp.ClientSession, dataset: SeedDataset,
                         catalogue: Sequence[SourceInfo] = SOURCE_CATALOGUE) -> List[UpdateSource]:
    """Picks the live integration of each catalogue source, falling back to curated data."""
    cfg = settings.sources
    scraper = GenericScraper(session, user_agent=cfg.scrape_user_agent,
                             timeout_sec=cfg.scrape_timeout_sec, max_chars=cfg.content_max_chars)
    sources: List[UpdateSource] = []
    for info in catalogue:
        target = cfg.scrape_targets.get(info.id)
        if target is not None:
            sources.append(ScrapedSource(info, scraper, target))
        elif info.id == "weather" and cfg.nws_area:
            sources.append(NwsAlertsSource(info, session, area=cfg.nws_area, user_agent=cfg.scrape_user_agent,
                                           timeout_sec=cfg.scrape_timeout_sec, max_chars=cfg.content_max_chars))
        else:
            sources.append(CuratedSource(info, dataset))
    log.info(f"Official sources: {[type(s).__name__ + ':' + s.info.id for s in sources]}")
    return sources


def build_report_chain(settings: Settings, session: aiohttp.ClientSession,
                       dataset: SeedDataset) -> List[ReportSource]:
    cfg = settings.social
    chain: List[ReportSource] = []
    if cfg.twitter_bearer_token:
        chain.append(TwitterSource(session, cfg.twitter_bearer_token, cfg.timeout_sec))
    if cfg.bluesky_access_token:
        chain.append(BlueskySource(session, cfg.bluesky_access_token, cfg.timeout_sec))
    chain.append(SeededReportSource(dataset))
    log.info(f"Social feed chain: {[s.name for s in chain]}")
    return chain


class Hub:
    """Owns shared resources and the orchestrators built on them"""

    def __init__(self, settings: Settings, *,
                 session: Optional[aiohttp.ClientSession] = None,
                 cache: Optional[CachePort] = None,
                 dataset: Optional[SeedDataset] = None):
        self.settings = settings
        self.session = session
        self.cache = cache
        self.dataset = dataset or CuratedDataset()
        self._owns_session = session is None
        self.geocoder: Optional[GeocodingResolver] = None
        self.updates: Optional[UpdateAggregator] = None
        self.reports: Optional[ReportFeed] = None

    async def start(self) -> None:
        s = self.settings
        if self.session is None:
            self.session = aiohttp.ClientSession()
        if self.cache is None:
            if s.cache.path:
                cache = SQLiteCache(s.cache.path, s.cache.default_ttl_sec,
                                    sweep_interval_sec=s.cache.sweep_interval_sec)
                await cache.init()
                await cache.gc()
                self.cache = cache
            else:
                self.cache = MemoryCache(s.cache.default_ttl_sec, sweep_interval_sec=s.cache.sweep_interval_sec)
        log.info(f"Cache backend: {type(self.cache).__name__}")

        self.geocoder = GeocodingResolver(
            build_geocoding_chain(s.geocoding.forward_order, s, self.session),
            build_geocoding_chain(s.geocoding.reverse_order, s, self.session),
            self.cache,
            timeout_sec=s.geocoding.timeout_sec,
            ttl_sec=s.cache.geocode_ttl_sec,
        )
        self.updates = UpdateAggregator(
            build_update_sources(s, self.session, self.dataset),
            self.dataset,
            self.cache,
            ttl_sec=s.cache.default_ttl_sec,
            limits=s.limits,
        )
        self.reports = ReportFeed(
            build_report_chain(s, self.session, self.dataset),
            self.cache,
            ttl_sec=s.cache.default_ttl_sec,
            default_limit=s.limits.social_reports,
        )

    async def close(self) -> None:
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
