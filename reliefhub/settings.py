# reliefhub/settings.py
from __future__ import annotations
from typing import Dict, List
from pydantic import BaseModel, Field

class CacheConfig(BaseModel):
    path: str = ""                             # empty -> in-process cache
    default_ttl_sec: int = 3600
    geocode_ttl_sec: int = 7 * 24 * 60 * 60    # location meaning rarely changes
    sweep_interval_sec: int = 300              # minimum gap between expired-entry sweeps

class GeocodingConfig(BaseModel):
    google_maps_api_key: str = ""
    mapbox_access_token: str = ""
    forward_order: List[str] = Field(default_factory=lambda: ["google_maps", "mapbox", "nominatim"])
    reverse_order: List[str] = Field(default_factory=lambda: ["google_maps", "nominatim"])
    timeout_sec: float = 5.0
    user_agent: str = "DisasterResponsePlatform/1.0"

class ScrapeSelectors(BaseModel):
    container: str
    title: str
    content: str
    link: str = "a"
    date: str = "time"

class ScrapeTarget(BaseModel):
    url: str
    selectors: ScrapeSelectors

class SourcesConfig(BaseModel):
    scrape_timeout_sec: float = 10.0
    scrape_user_agent: str = "Mozilla/5.0 (compatible; DisasterResponseBot/1.0)"
    content_max_chars: int = 500
    nws_area: str = ""                         # e.g. "NY"; empty -> curated weather updates
    scrape_targets: Dict[str, ScrapeTarget] = Field(default_factory=dict)

class SocialConfig(BaseModel):
    twitter_bearer_token: str = ""
    bluesky_access_token: str = ""
    timeout_sec: float = 10.0

class Limits(BaseModel):
    official_updates: int = 50
    category_updates: int = 20
    search_results: int = 30
    social_reports: int = 20

class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000

class Observability(BaseModel):
    metrics_enabled: bool = True
    service_name: str = "ReliefHub"
    build_version: str = "1.0.0"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    cache: CacheConfig = Field(default_factory=CacheConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    social: SocialConfig = Field(default_factory=SocialConfig)
    limits: Limits = Field(default_factory=Limits)
    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: Observability = Field(default_factory=Observability)
