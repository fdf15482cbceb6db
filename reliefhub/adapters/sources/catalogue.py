"""
Official source catalogue for ReliefHub.

Catalogue order is the merge order of the aggregator, which makes it
the tie-breaker between equally ranked updates.
"""

from typing import List
from reliefhub.core.models import SourceInfo

SOURCE_CATALOGUE: List[SourceInfo] = [
    SourceInfo(
        id="fema",
        name="FEMA",
        description="Federal Emergency Management Agency",
        url="https://fema.gov",
        categories=["shelter", "official", "federal"],
    ),
    SourceInfo(
        id="redcross",
        name="Red Cross",
        description="American Red Cross",
        url="https://redcross.org",
        categories=["volunteer", "shelter", "supplies"],
    ),
    SourceInfo(
        id="nyc",
        name="NYC Emergency Management",
        description="New York City Emergency Management",
        url="https://nyc.gov/emergency",
        categories=["local", "supplies", "official"],
    ),
    SourceInfo(
        id="weather",
        name="National Weather Service",
        description="National Weather Service Alerts",
        url="https://weather.gov",
        categories=["weather", "alerts", "federal"],
    ),
]
