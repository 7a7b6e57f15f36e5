"""
Per-feed health bookkeeping.

Lookups are plain dict reads so ``should_skip`` can run before every fetch
without touching disk. When a key-value store is given, every entry is read
from it once on first use, and ``flush()`` writes the changed table back in a
worker thread, once per fetched category rather than once per feed.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass

from loguru import logger

from monitor.analysis.history import KeyValueStore

MAX_CONSECUTIVE_FAILURES = 5
RETRY_AFTER_MS = 60 * 60 * 1000
RESPONSE_TIME_DECAY = 0.8


@dataclass
class FeedHealth:
    last_attempt: int = 0
    last_success: int = 0
    consecutive_failures: int = 0
    avg_response_time_ms: float = 0.0
    last_error: str | None = None
    total_requests: int = 0
    total_successes: int = 0


def health_key(category: str, source_name: str) -> str:
    return f"feedHealth:{category}:{source_name}"


class FeedHealthRegistry:
    STORAGE_KEY = "feed_health"

    def __init__(
        self,
        store: KeyValueStore | None = None,
        max_failures: int = MAX_CONSECUTIVE_FAILURES,
        retry_after_ms: int = RETRY_AFTER_MS,
        clock: Callable[[], float] = time.time,
    ):
        self._health: dict[str, FeedHealth] = {}
        self._store = store
        self._loaded = store is None
        self._dirty = False
        self.max_failures = max_failures
        self.retry_after_ms = retry_after_ms
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def load(self) -> None:
        """Read the stored table; entries already tracked in memory win."""
        self._loaded = True
        if self._store is None:
            return
        try:
            raw = self._store.get(self.STORAGE_KEY)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not restore feed health: {e}")
            return
        if not isinstance(raw, dict):
            return
        for key, data in raw.items():
            if key in self._health or not isinstance(data, dict):
                continue
            try:
                self._health[key] = FeedHealth(**data)
            except TypeError as e:
                logger.warning(f"Dropping stored feed health {key}: {e}")
        logger.debug(f"Restored health for {len(raw)} feeds")

    def get(self, category: str, source_name: str) -> FeedHealth:
        if not self._loaded:
            self.load()
        key = health_key(category, source_name)
        health = self._health.get(key)
        if health is None:
            health = FeedHealth()
            self._health[key] = health
        return health

    def update(
        self,
        category: str,
        source_name: str,
        success: bool,
        response_time_ms: float,
        error: str | None = None,
    ) -> FeedHealth:
        health = self.get(category, source_name)
        now = self._now_ms()
        health.last_attempt = now
        health.total_requests += 1

        if success:
            health.last_success = now
            health.consecutive_failures = 0
            health.total_successes += 1
            health.last_error = None
            if health.total_successes == 1:
                health.avg_response_time_ms = float(response_time_ms)
            else:
                health.avg_response_time_ms = (
                    health.avg_response_time_ms * RESPONSE_TIME_DECAY
                    + response_time_ms * (1 - RESPONSE_TIME_DECAY)
                )
        else:
            health.consecutive_failures += 1
            health.last_error = error or "Unknown error"
            if health.consecutive_failures == self.max_failures:
                logger.warning(
                    f"Feed {category}/{source_name} failed {health.consecutive_failures} "
                    f"times in a row, pausing it: {health.last_error}"
                )

        self._dirty = True
        return health

    def should_skip(self, category: str, source_name: str) -> bool:
        health = self.get(category, source_name)
        if health.consecutive_failures < self.max_failures:
            return False
        return self._now_ms() - health.last_attempt < self.retry_after_ms

    def all(self) -> dict[str, FeedHealth]:
        return dict(self._health)

    async def flush(self) -> None:
        """Write changed health to the store without blocking the event loop."""
        if self._store is None or not self._dirty:
            return
        snapshot = {key: asdict(health) for key, health in self._health.items()}
        self._dirty = False
        try:
            await asyncio.to_thread(self._store.set, self.STORAGE_KEY, snapshot)
        except (OSError, TypeError, ValueError) as e:
            self._dirty = True
            logger.warning(f"Could not persist feed health: {e}")
