"""
Seeded social feed for ReliefHub.

The last link of the social feed chain; always available.
"""

from typing import List, Optional
from reliefhub.common.clock import Clock, utc_now
from reliefhub.core.classify import matches_report
from reliefhub.core.models import RawReport
from reliefhub.observability.logging_setup import get_logger
from reliefhub.ports.providers import SeedDataset

log = get_logger("reliefhub.social.seeded")


class SeededReportSource:
    """Social feed answered from the seed dataset"""

    name = "seeded"

    def __init__(self, dataset: SeedDataset, clock: Clock = utc_now):
        self.dataset = dataset
        self._clock = clock

    async def fetch(self, keywords: Optional[str], disaster_type: Optional[str], limit: int) -> List[RawReport]:
        reports = [
            report for report in self.dataset.social_reports(self._clock())
            if matches_report(report, keywords, disaster_type)
        ]
        log.info(f"Seeded social reports matched: {len(reports)}")
        return reports
