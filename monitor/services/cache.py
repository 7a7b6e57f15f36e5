"""
ResponseCache - in-memory TTL cache for upstream responses.

Entries stay fresh for their TTL, then stale for one more TTL. Stale data is
handed back flagged as such so a failed refresh can fall back to it; past the
stale window the entry is gone.
"""

import asyncio
import hashlib
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from loguru import logger

T = TypeVar("T")

MAX_KEY_LENGTH = 200


@dataclass
class CacheEntry(Generic[T]):
    data: T
    stored_at: datetime
    fresh_until: datetime
    stale_until: datetime


@dataclass
class CacheResult(Generic[T]):
    data: T
    is_stale: bool


@dataclass
class CacheStats:
    hits: int = 0
    stale_hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0

    def to_dict(self) -> dict[str, Any]:
        looked_up = self.hits + self.stale_hits + self.misses
        served = self.hits + self.stale_hits
        return {
            "hits": self.hits,
            "stale_hits": self.stale_hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "size": self.size,
            "hit_rate": f"{(served / looked_up if looked_up else 0.0):.2%}",
        }


class ResponseCache:
    """
    Usage:
        cache = ResponseCache(prefix="finnhub_")
        key = cache.make_key(url, {"symbol": "SPY"})
        if (hit := await cache.get(key)) and not hit.is_stale:
            return hit.data
    """

    def __init__(
        self,
        prefix: str = "",
        max_size: int = 256,
        default_ttl: timedelta = timedelta(minutes=5),
        stale_while_revalidate: bool = True,
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._prefix = prefix
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._stale_while_revalidate = stale_while_revalidate
        self._clock = clock
        self._debug = debug
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    def make_key(self, url: str, params: dict[str, Any] | None = None) -> str:
        key = url
        if params:
            key += "?" + "&".join(f"{k}={v}" for k, v in sorted(params.items()))
        if len(key) > MAX_KEY_LENGTH:
            key = hashlib.md5(key.encode()).hexdigest()
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> CacheResult[Any] | None:
        now = self._clock()
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.stale_until:
                if entry is not None:
                    del self._entries[key]
                self._stats.misses += 1
                return None

            is_stale = now > entry.fresh_until
            if is_stale:
                self._stats.stale_hits += 1
            else:
                self._stats.hits += 1
            self._trace(f"{'stale ' if is_stale else ''}hit {key[:60]}")
            return CacheResult(data=entry.data, is_stale=is_stale)

    async def set(self, key: str, data: Any, ttl: timedelta | None = None) -> None:
        ttl = ttl or self._default_ttl
        now = self._clock()
        entry = CacheEntry(
            data=data,
            stored_at=now,
            fresh_until=now + ttl,
            stale_until=now + ttl * 2 if self._stale_while_revalidate else now + ttl,
        )
        async with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                oldest = min(self._entries, key=lambda k: self._entries[k].stored_at)
                del self._entries[oldest]
                self._stats.evictions += 1
            self._entries[key] = entry

    async def invalidate(self, fragment: str) -> int:
        """Drop every key containing ``fragment``."""
        async with self._lock:
            doomed = [k for k in self._entries if fragment in k]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def get_stats(self) -> CacheStats:
        self._stats.size = len(self._entries)
        return self._stats

    def _trace(self, message: str) -> None:
        if self._debug:
            logger.debug(f"[ResponseCache] {message}")
