"""
Error taxonomy for ReliefHub.

Provider failures are recovered inside the chains; only exhausted
geocoding chains and invalid queries reach the caller.
"""

from typing import List, Optional


class ReliefHubError(Exception):
    """Base class for ReliefHub errors"""


class ProviderError(ReliefHubError):
    """A single external provider or source failed"""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class AggregateExhausted(ReliefHubError):
    """Every provider in a chain failed"""

    def __init__(self, operation: str, attempts: Optional[List[ProviderError]] = None):
        self.operation = operation
        self.attempts = list(attempts or [])
        tried = ", ".join(a.provider for a in self.attempts) or "none configured"
        super().__init__(f"All {operation} providers failed ({tried})")


class QueryValidationError(ReliefHubError):
    """A required query parameter is missing or out of range"""
