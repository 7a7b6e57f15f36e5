"""
RequestDeduplicator - one upstream call per key, shared by concurrent callers.

Two categories that list the same feed URL, or a manual refresh racing the
scheduled one, end up awaiting a single fetch.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class DeduplicatorStats:
    started: int = 0  # upstream calls actually made
    joined: int = 0  # callers that attached to an in-flight call
    in_flight: int = 0

    @property
    def join_rate(self) -> float:
        total = self.started + self.joined
        return self.joined / total if total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "started": self.started,
            "joined": self.joined,
            "in_flight": self.in_flight,
            "join_rate": f"{self.join_rate:.2%}",
        }


class RequestDeduplicator:
    """
    Shares in-flight coroutines by key.

    Usage:
        dedup = RequestDeduplicator()
        body = await dedup.dedupe(feed.url, lambda: fetch(feed.url))

    A failure propagates to every caller waiting on the key, and the key is
    released as soon as the call settles so the next refresh fetches again.
    """

    def __init__(self, debug: bool = False):
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._lock = asyncio.Lock()
        self._debug = debug
        self._stats = DeduplicatorStats()

    async def dedupe(self, key: str, request_fn: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            task = self._in_flight.get(key)
            if task is not None:
                self._stats.joined += 1
                self._trace(f"join {key[:60]}")
            else:
                self._stats.started += 1
                self._trace(f"start {key[:60]}")
                task = asyncio.create_task(self._run(key, request_fn))
                self._in_flight[key] = task

        return await task

    async def _run(self, key: str, request_fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await request_fn()
        finally:
            async with self._lock:
                self._in_flight.pop(key, None)
            self._trace(f"settled {key[:60]}")

    async def cancel_all(self) -> int:
        """Cancel every in-flight call. Returns how many were cancelled."""
        async with self._lock:
            tasks = list(self._in_flight.values())
            self._in_flight.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            self._trace(f"cancelled {len(tasks)} in-flight calls")
        return len(tasks)

    def get_in_flight_count(self) -> int:
        return len(self._in_flight)

    def get_stats(self) -> DeduplicatorStats:
        self._stats.in_flight = len(self._in_flight)
        return self._stats

    def _trace(self, message: str) -> None:
        if self._debug:
            logger.debug(f"[Deduplicator] {message}")
