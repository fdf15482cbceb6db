# reliefhub/main.py
import os, asyncio, json
from typing import List
import uvicorn
from reliefhub.api import create_app
from reliefhub.observability.logging_setup import setup_logging, get_logger
from reliefhub.settings import ScrapeTarget, Settings

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def _csv(name, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None: return default
    return [p.strip().lower() for p in raw.split(",") if p.strip()]

def build_settings() -> Settings:
    s = Settings()

    # Cache
    s.cache.path = os.getenv("CACHE_PATH", s.cache.path)
    s.cache.default_ttl_sec = int(os.getenv("CACHE_DEFAULT_TTL_SEC", s.cache.default_ttl_sec))
    s.cache.geocode_ttl_sec = int(os.getenv("CACHE_GEOCODE_TTL_SEC", s.cache.geocode_ttl_sec))
    s.cache.sweep_interval_sec = int(os.getenv("CACHE_SWEEP_INTERVAL_SEC", s.cache.sweep_interval_sec))

    # Geocoding
    s.geocoding.google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", s.geocoding.google_maps_api_key)
    s.geocoding.mapbox_access_token = os.getenv("MAPBOX_ACCESS_TOKEN", s.geocoding.mapbox_access_token)
    s.geocoding.forward_order = _csv("GEOCODE_FORWARD_ORDER", s.geocoding.forward_order)
    s.geocoding.reverse_order = _csv("GEOCODE_REVERSE_ORDER", s.geocoding.reverse_order)
    s.geocoding.timeout_sec = float(os.getenv("GEOCODE_TIMEOUT_SEC", s.geocoding.timeout_sec))
    s.geocoding.user_agent = os.getenv("GEOCODE_USER_AGENT", s.geocoding.user_agent)

    # Official sources
    s.sources.scrape_timeout_sec = float(os.getenv("SCRAPE_TIMEOUT_SEC", s.sources.scrape_timeout_sec))
    s.sources.nws_area = os.getenv("NWS_AREA", s.sources.nws_area).strip().upper()
    targets = os.getenv("SCRAPE_TARGETS")
    if targets:
        # {"fema": {"url": "...", "selectors": {"container": "...", ...}}, ...}
        s.sources.scrape_targets = {k: ScrapeTarget.model_validate(v) for k, v in json.loads(targets).items()}

    # Social
    s.social.twitter_bearer_token = os.getenv("TWITTER_BEARER_TOKEN", s.social.twitter_bearer_token)
    s.social.bluesky_access_token = os.getenv("BLUESKY_ACCESS_TOKEN", s.social.bluesky_access_token)
    s.social.timeout_sec = float(os.getenv("SOCIAL_TIMEOUT_SEC", s.social.timeout_sec))

    # API
    s.api.host = os.getenv("HOST", s.api.host)
    s.api.port = int(os.getenv("PORT", s.api.port))

    # Observability
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)

    return s

async def main():
    # Logger comes up before settings so config errors are visible
    setup_logging(os.getenv("LOG_LEVEL", "INFO"), json=_b("LOG_JSON", False))
    log = get_logger("reliefhub.main")

    s = build_settings()
    setup_logging(s.observability.log_level, json=s.observability.log_json)
    log.info("Settings loaded")

    app = create_app(s)
    server = uvicorn.Server(uvicorn.Config(app, host=s.api.host, port=s.api.port, log_level="info"))

    # uvicorn handles SIGINT/SIGTERM and drives the lifespan shutdown
    log.info(f"HTTP server starting on {s.api.host}:{s.api.port}")
    await server.serve()
    log.info("Shut down")

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
