"""
Application assembly and settings unit tests
"""

import json
from unittest.mock import MagicMock
import pytest
from reliefhub.adapters.geocoding import GoogleMapsGeocoder, MapboxGeocoder, NominatimGeocoder
from reliefhub.adapters.social import BlueskySource, SeededReportSource, TwitterSource
from reliefhub.adapters.sources import CuratedSource, NwsAlertsSource, ScrapedSource
from reliefhub.adapters.storage import MemoryCache, SQLiteCache
from reliefhub.bootstrap import Hub, build_geocoding_chain, build_report_chain, build_update_sources
from reliefhub.main import build_settings
from reliefhub.settings import ScrapeSelectors, ScrapeTarget, Settings


class TestGeocodingChain:
    """Provider selection tests"""

    def test_providers_without_credentials_are_excluded(self):
        settings = Settings()
        chain = build_geocoding_chain(settings.geocoding.forward_order, settings, MagicMock())
        assert [type(p) for p in chain] == [NominatimGeocoder]

    def test_full_forward_chain_in_order(self):
        settings = Settings()
        settings.geocoding.google_maps_api_key = "g"
        settings.geocoding.mapbox_access_token = "m"

        forward = build_geocoding_chain(settings.geocoding.forward_order, settings, MagicMock())
        reverse = build_geocoding_chain(settings.geocoding.reverse_order, settings, MagicMock())

        assert [type(p) for p in forward] == [GoogleMapsGeocoder, MapboxGeocoder, NominatimGeocoder]
        assert [p.name for p in reverse] == ["google_maps", "nominatim"]

    def test_unknown_names_are_ignored(self):
        chain = build_geocoding_chain(["here", "nominatim"], Settings(), MagicMock())
        assert [p.name for p in chain] == ["nominatim"]


class TestSources:
    """Official source selection tests"""

    def test_defaults_are_curated(self, dataset):
        sources = build_update_sources(Settings(), MagicMock(), dataset)
        assert all(isinstance(s, CuratedSource) for s in sources)
        assert [s.info.id for s in sources] == ["fema", "redcross", "nyc", "weather"]

    def test_scrape_target_and_nws_area(self, dataset):
        settings = Settings()
        settings.sources.nws_area = "NY"
        settings.sources.scrape_targets = {
            "fema": ScrapeTarget(url="https://fema.gov/news", selectors=ScrapeSelectors(container="li", title="h3", content="p")),
        }

        sources = build_update_sources(settings, MagicMock(), dataset)

        kinds = {s.info.id: type(s) for s in sources}
        assert kinds == {"fema": ScrapedSource, "redcross": CuratedSource, "nyc": CuratedSource, "weather": NwsAlertsSource}

    def test_report_chain(self, dataset):
        settings = Settings()
        assert [type(s) for s in build_report_chain(settings, MagicMock(), dataset)] == [SeededReportSource]

        settings.social.twitter_bearer_token = "t"
        settings.social.bluesky_access_token = "b"
        assert [type(s) for s in build_report_chain(settings, MagicMock(), dataset)] == [
            TwitterSource, BlueskySource, SeededReportSource,
        ]


class TestHub:
    """Hub lifecycle tests"""

    @pytest.mark.asyncio
    async def test_memory_cache_without_path(self):
        session = MagicMock()
        async with Hub(Settings(), session=session) as hub:
            assert isinstance(hub.cache, MemoryCache)
            assert hub.cache.sweep_interval == 300
            assert hub.updates is not None and hub.reports is not None and hub.geocoder is not None
        session.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_sqlite_cache_with_path(self, temp_db_path):
        settings = Settings()
        settings.cache.path = temp_db_path
        hub = Hub(settings, session=MagicMock())
        await hub.start()
        assert isinstance(hub.cache, SQLiteCache)
        await hub.close()


class TestBuildSettings:
    """Environment overlay tests"""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "GEOCODE_FORWARD_ORDER", "SCRAPE_TARGETS", "LOG_JSON"):
            monkeypatch.delenv(name, raising=False)
        s = build_settings()
        assert s.api.port == 5000
        assert s.geocoding.forward_order == ["google_maps", "mapbox", "nominatim"]
        assert s.cache.geocode_ttl_sec == 604800
        assert s.limits.official_updates == 50

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("GEOCODE_FORWARD_ORDER", "Nominatim, google_maps")
        monkeypatch.setenv("NWS_AREA", "ny")
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("CACHE_SWEEP_INTERVAL_SEC", "45")
        monkeypatch.setenv("SCRAPE_TARGETS", json.dumps({
            "redcross": {"url": "https://redcross.org/news", "selectors": {"container": "article", "title": "h2", "content": "p"}},
        }))

        s = build_settings()

        assert s.api.port == 8080
        assert s.geocoding.forward_order == ["nominatim", "google_maps"]
        assert s.sources.nws_area == "NY"
        assert s.observability.log_json is True
        assert s.cache.sweep_interval_sec == 45
        assert s.sources.scrape_targets["redcross"].selectors.link == "a"
