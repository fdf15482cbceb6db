"""
Curated official source for ReliefHub.

Serves a source's slice of the curated dataset when no live
integration is configured for it.
"""

from typing import List
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.models import SourceInfo, Update
from reliefhub.observability.logging_setup import get_logger
from reliefhub.ports.providers import SeedDataset

log = get_logger("reliefhub.sources")


class CuratedSource:
    """Official source answered from the seed dataset"""

    def __init__(self, info: SourceInfo, dataset: SeedDataset, clock: Clock = utc_now):
        self.info = info
        self.dataset = dataset
        self._clock = clock

    async def fetch(self) -> List[Update]:
        log.debug(f"No live integration for {self.info.id}, serving curated updates")
        return [u for u in self.dataset.official_updates(self._clock()) if u.source == self.info.name]
