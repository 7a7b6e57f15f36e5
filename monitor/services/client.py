"""
ServiceClient - async JSON client for market APIs.

Every request goes through, in order: response cache, circuit breaker,
in-flight deduplication, then httpx. Stale cache entries are served when the
breaker is open or the call fails.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

import httpx
from loguru import logger

from monitor.services.cache import ResponseCache
from monitor.services.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerRegistry,
)
from monitor.services.deduplicator import RequestDeduplicator
from monitor.services.errors import (
    CircuitOpenError,
    RateLimitError,
    RequestTimeoutError,
    ServiceError,
)

T = TypeVar("T")


@dataclass
class RequestResult(Generic[T]):
    data: T
    from_cache: bool = False
    is_stale: bool = False
    service_id: str | None = None


@dataclass
class ServiceConfig:
    """Per-upstream overrides; anything unset falls back to client defaults."""

    service_id: str
    timeout: float | None = None
    cache_ttl: timedelta | None = None
    use_cache: bool = True
    use_circuit_breaker: bool = True
    headers: dict[str, str] | None = None
    circuit_breaker_config: CircuitBreakerConfig | None = None


class ServiceClient:
    """
    Usage:
        client = ServiceClient()
        client.register_service(
            ServiceConfig("finnhub", timeout=10.0, circuit_breaker_config=FINNHUB_BREAKER_CONFIG)
        )
        result = await client.request("finnhub", url, params={"symbol": "SPY"})
    """

    def __init__(
        self,
        default_timeout: float = 10.0,
        default_cache_ttl: timedelta = timedelta(minutes=1),
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._default_timeout = default_timeout
        self._default_cache_ttl = default_cache_ttl
        self._transport = transport

        self._cache = ResponseCache(
            prefix="svc_", default_ttl=default_cache_ttl, clock=clock, debug=debug
        )
        self._breakers = CircuitBreakerRegistry(clock=clock)
        self._deduplicator = RequestDeduplicator(debug=debug)
        self._services: dict[str, ServiceConfig] = {}
        self._http_client: httpx.AsyncClient | None = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._default_timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._http_client

    def register_service(self, config: ServiceConfig) -> None:
        self._services[config.service_id] = config
        if config.use_circuit_breaker:
            self._breakers.get(config.service_id, config.circuit_breaker_config)

    def breaker(self, service_id: str) -> CircuitBreaker:
        config = self._services.get(service_id)
        return self._breakers.get(
            service_id, config.circuit_breaker_config if config else None
        )

    async def request(
        self,
        service_id: str,
        url: str,
        params: dict[str, Any] | None = None,
        cache_ttl: timedelta | None = None,
        timeout: float | None = None,
    ) -> RequestResult[Any]:
        """
        GET ``url`` and decode JSON.

        Raises:
            CircuitOpenError: breaker open and nothing cached
            RequestTimeoutError, RateLimitError, ServiceError: call failed and
                nothing cached
        """
        config = self._services.get(service_id) or ServiceConfig(service_id)
        ttl = cache_ttl or config.cache_ttl or self._default_cache_ttl
        req_timeout = timeout or config.timeout or self._default_timeout
        cache_key = self._cache.make_key(url, params)

        stale = None
        if config.use_cache:
            cached = await self._cache.get(cache_key)
            if cached is not None and not cached.is_stale:
                return RequestResult(cached.data, from_cache=True, service_id=service_id)
            stale = cached

        cb = self.breaker(service_id) if config.use_circuit_breaker else None
        if cb is not None and not cb.can_request():
            if stale is not None:
                logger.warning(f"{service_id}: circuit open, serving stale data")
                return RequestResult(
                    stale.data, from_cache=True, is_stale=True, service_id=service_id
                )
            raise CircuitOpenError(service_id, cb.get_time_until_reset() or 0.0)

        async def do_request() -> Any:
            return await self._get_json(
                service_id, url, params, config.headers or {}, req_timeout
            )

        try:
            data = await self._deduplicator.dedupe(cache_key, do_request)
        except asyncio.CancelledError:
            if cb is not None:
                cb.release_trial()
            raise
        except ServiceError as e:
            if cb is not None:
                cb.record_failure()
            if stale is not None:
                logger.warning(f"{service_id}: {e}, serving stale data")
                return RequestResult(
                    stale.data, from_cache=True, is_stale=True, service_id=service_id
                )
            raise

        if cb is not None:
            cb.record_success()
        if config.use_cache:
            await self._cache.set(cache_key, data, ttl)
        return RequestResult(data, service_id=service_id)

    async def _get_json(
        self,
        service_id: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str],
        timeout: float,
    ) -> Any:
        try:
            async with asyncio.timeout(timeout):
                response = await self._client().get(
                    url, params=params, headers=headers, timeout=timeout
                )
                if response.status_code == 429:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        service_id,
                        float(retry_after) if retry_after and retry_after.isdigit() else None,
                    )
                response.raise_for_status()
                return response.json()
        except (httpx.TimeoutException, TimeoutError) as e:
            raise RequestTimeoutError(service_id, timeout) from e
        except httpx.HTTPStatusError as e:
            raise ServiceError(
                f"{service_id}: HTTP {e.response.status_code}", service_id=service_id
            ) from e
        except (httpx.RequestError, ValueError) as e:
            raise ServiceError(f"{service_id}: {e}", service_id=service_id) from e

    def get_health_status(self) -> dict[str, Any]:
        return {
            "cache": self._cache.get_stats().to_dict(),
            "circuit_breakers": self._breakers.get_all_status(),
            "deduplicator": self._deduplicator.get_stats().to_dict(),
            "open_circuits": self._breakers.get_open_circuits(),
        }

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        await self._deduplicator.cancel_all()

    async def __aenter__(self) -> "ServiceClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


_global_client: ServiceClient | None = None


def get_service_client() -> ServiceClient:
    global _global_client
    if _global_client is None:
        _global_client = ServiceClient()
    return _global_client


async def close_service_client() -> None:
    global _global_client
    if _global_client is not None:
        await _global_client.close()
        _global_client = None
