"""
Core domain models and pure functions for ReliefHub.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    Address, Coordinate, Priority, RawReport, Severity, SocialReport, Update,
)
from .errors import AggregateExhausted, ProviderError, QueryValidationError
from .filters import apply_limit, filter_by_category, filter_by_severity, search
from .classify import classify_priority, process_reports, relevance_score
from .ranking import rank_reports, sort_updates

__all__ = [
    "Address", "Coordinate", "Priority", "RawReport", "Severity", "SocialReport", "Update",
    "AggregateExhausted", "ProviderError", "QueryValidationError",
    "apply_limit", "filter_by_category", "filter_by_severity", "search",
    "classify_priority", "process_reports", "relevance_score",
    "rank_reports", "sort_updates",
]
