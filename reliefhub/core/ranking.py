"""
Ordering functions for ReliefHub.

This module contains pure functions that put merged updates and
classified reports into their final, deterministic order.
"""

from typing import List, Sequence
from .models import SocialReport, Update

# Severity order (low -> high)
SEVERITY_ORDER = {
    "low": 1,
    "medium": 2,
    "high": 3,
}

# Priority order (low -> urgent)
PRIORITY_ORDER = {
    "low": 0,
    "medium": 1,
    "high": 2,
    "urgent": 3,
}


def sort_updates(updates: Sequence[Update]) -> List[Update]:
    """
    Sorts updates by severity, then by publication time, both descending.

    The sort is stable: ties keep their input order.

    Args:
        updates: merged updates from all sources

    Returns:
        a new ranked list
    """
    return sorted(
        updates,
        key=lambda u: (SEVERITY_ORDER[u.severity], u.published_at),
        reverse=True,
    )


def rank_reports(reports: Sequence[SocialReport]) -> List[SocialReport]:
    """
    Sorts reports by priority, then by relevance score, both descending.

    The sort is stable: ties keep their input order.
    """
    return sorted(
        reports,
        key=lambda r: (PRIORITY_ORDER[r.priority], r.relevance_score),
        reverse=True,
    )
