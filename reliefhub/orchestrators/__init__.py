"""
Orchestrators for ReliefHub.

This module contains the orchestrators that run the core pipelines
over ports and adapters.
"""
from .geocoding import GeocodingResolver
from .official_updates import UpdateAggregator
from .social_reports import ReportFeed, ReportsResult

__all__ = ["GeocodingResolver", "UpdateAggregator", "ReportFeed", "ReportsResult"]
