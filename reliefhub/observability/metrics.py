"""
Metrics definitions for ReliefHub.

This module defines Prometheus metrics for monitoring
provider chains, source aggregation and the cache.
"""

from prometheus_client import Counter, Histogram

# Counters
provider_attempts = Counter(
    "provider_attempts_total",
    "Provider calls made by fallback chains",
    ["operation", "provider", "outcome"]
)

cache_lookups = Counter(
    "cache_lookups_total",
    "Cache reads by outcome",
    ["operation", "result"]
)

source_failures = Counter(
    "source_failures_total",
    "Official update sources that failed during aggregation",
    ["source"]
)

updates_degraded = Counter(
    "updates_degraded_total",
    "Aggregations that fell back to the curated dataset"
)

# Histograms
operation_seconds = Histogram(
    "operation_duration_seconds",
    "Time spent computing a result on cache miss",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0]
)
