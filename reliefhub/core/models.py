"""
Core domain models for ReliefHub.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# Advisory severity of an official update
Severity = Literal["high", "medium", "low"]

# Derived urgency of a social report
Priority = Literal["urgent", "high", "medium", "low"]


class Coordinate(BaseModel):
    """Forward geocoding result"""
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    formatted_address: str = ""
    source: str


class Address(BaseModel):
    """Reverse geocoding result"""
    model_config = ConfigDict(frozen=True)

    formatted_address: str = ""
    components: Any = None
    source: str


class Update(BaseModel):
    """Official agency advisory"""
    id: str
    source: str
    title: str
    content: str
    url: str
    published_at: datetime
    severity: Severity = "medium"
    category: Optional[str] = None
    contact: Optional[str] = None


class RawReport(BaseModel):
    """Social post as delivered by a feed source, before classification"""
    id: str
    post: str
    user: str = ""
    timestamp: datetime
    verified: bool = False
    location: Optional[str] = None
    hashtags: List[str] = Field(default_factory=list)


class SocialReport(RawReport):
    """Classified and scored social post"""
    priority: Priority
    relevance_score: int
    processed_at: datetime


class SourceInfo(BaseModel):
    """Catalogue entry for an official update source"""
    id: str
    name: str
    description: str = ""
    url: str = ""
    categories: List[str] = Field(default_factory=list)
    active: bool = True


class UpdateBatch(BaseModel):
    """Ranked updates as they are written to the cache"""
    items: List[Update] = Field(default_factory=list)
    degraded: bool = False
    last_updated: datetime


class ReportBatch(BaseModel):
    """Ranked reports as they are written to the cache"""
    items: List[SocialReport] = Field(default_factory=list)
    last_updated: datetime


class UpdatesEnvelope(BaseModel):
    """Response envelope for official update queries"""
    disaster_id: Optional[str] = None
    category: Optional[str] = None
    search_query: Optional[str] = None
    total_count: int
    sources_checked: List[str]
    filters_applied: Dict[str, Optional[str]] = Field(default_factory=dict)
    degraded: bool = False
    last_updated: datetime
    items: List[Update]


class ReportsEnvelope(BaseModel):
    """Response envelope for social report queries"""
    disaster_id: Optional[str] = None
    total_count: int
    keywords_used: Optional[str] = None
    disaster_type: Optional[str] = None
    last_updated: datetime
    items: List[SocialReport]


class SourcesCatalogue(BaseModel):
    """Available official sources"""
    available_sources: List[SourceInfo]
    total_sources: int


class Broadcast(BaseModel):
    """Real-time notification payload for subscribers"""
    disaster_id: str
    data: List[SocialReport]
