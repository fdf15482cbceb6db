"""
ReliefHub: emergency response aggregation service.
"""

__version__ = "1.0.0"
