"""
Social feed adapters for ReliefHub.
"""

from .twitter import TwitterSource
from .bluesky import BlueskySource
from .seeded import SeededReportSource

__all__ = ["TwitterSource", "BlueskySource", "SeededReportSource"]
