"""
Resilience layer for upstream feeds and APIs.

Provides:
- CircuitBreaker: stops calling an upstream that keeps failing
- FeedHealthRegistry: per-feed failure bookkeeping, checked before each fetch
- RequestDeduplicator: one in-flight call per key
- ResponseCache: TTL cache with stale fallback
- run_pool: bounded-concurrency runner
- LoadGeneration: drops results of superseded refreshes
- ServiceClient: JSON client combining the above
"""

from monitor.services.errors import (
    CircuitOpenError,
    RateLimitError,
    RequestTimeoutError,
    ServiceError,
)
from monitor.services.cache import CacheResult, ResponseCache
from monitor.services.circuit_breaker import (
    FEED_BREAKER_CONFIG,
    FINNHUB_BREAKER_CONFIG,
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerRegistry,
    CircuitState,
)
from monitor.services.deduplicator import RequestDeduplicator
from monitor.services.feed_health import FeedHealth, FeedHealthRegistry
from monitor.services.generation import LoadGeneration
from monitor.services.pool import run_pool
from monitor.services.client import RequestResult, ServiceClient, ServiceConfig

__all__ = [
    # Errors
    "CircuitOpenError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServiceError",
    # Cache
    "CacheResult",
    "ResponseCache",
    # Circuit breaker
    "FEED_BREAKER_CONFIG",
    "FINNHUB_BREAKER_CONFIG",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitBreakerRegistry",
    "CircuitState",
    # Concurrency
    "LoadGeneration",
    "RequestDeduplicator",
    "run_pool",
    # Feed health
    "FeedHealth",
    "FeedHealthRegistry",
    # Client
    "RequestResult",
    "ServiceClient",
    "ServiceConfig",
]
