"""
Official update source adapters for ReliefHub.
"""

from .catalogue import SOURCE_CATALOGUE
from .curated import CuratedSource
from .nws import NwsAlertsSource
from .scrape import GenericScraper, ScrapedSource, parse_updates

__all__ = ["SOURCE_CATALOGUE", "CuratedSource", "NwsAlertsSource", "GenericScraper", "ScrapedSource", "parse_updates"]
