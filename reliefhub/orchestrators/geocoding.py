"""
Geocoding orchestrator for ReliefHub.

This module resolves locations through an ordered chain of geocoding
providers. Providers are tried one after another, each under its own
timeout, and the first usable answer wins.
"""

import asyncio
import math
from typing import Awaitable, Callable, List, Sequence, TypeVar
from reliefhub.common.cache import read_through
from reliefhub.core import cache_keys
from reliefhub.core.errors import AggregateExhausted, ProviderError, QueryValidationError
from reliefhub.core.models import Address, Coordinate
from reliefhub.observability.logging_setup import get_logger
from reliefhub.observability.metrics import provider_attempts
from reliefhub.ports.cache import CachePort
from reliefhub.ports.providers import GeocodingProvider

log = get_logger("reliefhub.geocoding")

T = TypeVar("T")


class GeocodingResolver:
    """Provider chain resolver for forward and reverse geocoding"""

    def __init__(self,
                 forward_chain: Sequence[GeocodingProvider],
                 reverse_chain: Sequence[GeocodingProvider],
                 cache: CachePort,
                 *,
                 timeout_sec: float = 5.0,
                 ttl_sec: int = 7 * 24 * 60 * 60):
        """
        Initializes the resolver.

        Args:
            forward_chain: providers for text -> coordinate, in priority order
            reverse_chain: providers for coordinate -> address, in priority order
            cache: cache port
            timeout_sec: bound on each single provider attempt
            ttl_sec: TTL for resolved locations
        """
        self.forward_chain = list(forward_chain)
        self.reverse_chain = list(reverse_chain)
        self.cache = cache
        self.timeout = timeout_sec
        self.ttl = ttl_sec
        log.info(
            f"Geocoding chains: forward={[p.name for p in self.forward_chain]} "
            f"reverse={[p.name for p in self.reverse_chain]}"
        )

    async def resolve_forward(self, location: str) -> Coordinate:
        """
        Resolves free text to a coordinate.

        Args:
            location: place name or address

        Returns:
            coordinate tagged with the provider that produced it

        Raises:
            QueryValidationError: blank location
            AggregateExhausted: every provider failed
        """
        if not location or not location.strip():
            raise QueryValidationError("location is required")
        text = location.strip()

        coordinate, hit = await read_through(
            self.cache,
            cache_keys.geocode_key(text),
            Coordinate,
            lambda: self._run_chain("geocode", self.forward_chain, lambda p: p.forward(text)),
            ttl_sec=self.ttl,
            operation="geocode",
        )
        if not hit:
            log.info(f"Geocoded \"{text}\" to {coordinate.lat}, {coordinate.lng} via {coordinate.source}")
        return coordinate

    async def resolve_reverse(self, lat: float, lng: float) -> Address:
        """
        Resolves a coordinate to an address.

        Raises:
            QueryValidationError: coordinate out of range
            AggregateExhausted: every provider failed
        """
        _validate_coordinate(lat, lng)

        address, hit = await read_through(
            self.cache,
            cache_keys.reverse_geocode_key(lat, lng),
            Address,
            lambda: self._run_chain("reverse_geocode", self.reverse_chain, lambda p: p.reverse(lat, lng)),
            ttl_sec=self.ttl,
            operation="reverse_geocode",
        )
        if not hit:
            log.info(f"Reverse geocoded {lat}, {lng} via {address.source}")
        return address

    async def _run_chain(self,
                         operation: str,
                         chain: Sequence[GeocodingProvider],
                         call: Callable[[GeocodingProvider], Awaitable[T]]) -> T:
        """
        Invokes providers in order until one succeeds.

        Each provider is attempted at most once.

        Raises:
            AggregateExhausted: with the failure of every attempt
        """
        attempts: List[ProviderError] = []

        for provider in chain:
            try:
                result = await asyncio.wait_for(call(provider), timeout=self.timeout)
            except asyncio.TimeoutError:
                error = ProviderError(provider.name, f"timed out after {self.timeout}s")
            except ProviderError as e:
                error = e
            except Exception as e:
                error = ProviderError(provider.name, f"{type(e).__name__}: {e}")
            else:
                provider_attempts.labels(operation=operation, provider=provider.name, outcome="success").inc()
                return result

            attempts.append(error)
            provider_attempts.labels(operation=operation, provider=provider.name, outcome="failure").inc()
            log.warning(f"{operation} provider failed: {error}")

        exhausted = AggregateExhausted(operation, attempts)
        log.error(str(exhausted))
        raise exhausted


def _validate_coordinate(lat: float, lng: float) -> None:
    for name, value, bound in (("lat", lat, 90.0), ("lng", lng, 180.0)):
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise QueryValidationError(f"{name} must be a finite number")
        if abs(value) > bound:
            raise QueryValidationError(f"{name} must be within ±{bound:g}")
