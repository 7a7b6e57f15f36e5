"""Unit tests for the resilience helpers in monitor.services.

Covers:
- run_pool: input order, concurrency bound, empty input
- LoadGeneration: tokens, cancellation of tracked tasks
- RequestDeduplicator: shared in-flight calls, failure propagation
- ResponseCache: fresh/stale/expired windows, eviction, invalidation
- FeedHealthRegistry: skip window, rolling response time, batched persistence
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from monitor.analysis.history import InMemoryStore
from monitor.services.cache import ResponseCache
from monitor.services.deduplicator import RequestDeduplicator
from monitor.services.feed_health import FeedHealthRegistry, health_key
from monitor.services.generation import LoadGeneration
from monitor.services.pool import run_pool


# ── run_pool ─────────────────────────────────────────────────────────────────────

class TestRunPool:
    async def test_empty(self):
        assert await run_pool([]) == []

    async def test_results_in_input_order(self):
        async def job(i: int, delay: float) -> int:
            await asyncio.sleep(delay)
            return i

        delays = [0.03, 0.0, 0.02, 0.01]
        tasks = [lambda i=i, d=d: job(i, d) for i, d in enumerate(delays)]
        assert await run_pool(tasks, concurrency=2) == [0, 1, 2, 3]

    async def test_concurrency_bound(self):
        """No more than ``concurrency`` jobs may run at once."""
        running = 0
        peak = 0

        async def job() -> None:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        await run_pool([job for _ in range(12)], concurrency=3)
        assert peak == 3


# ── LoadGeneration ───────────────────────────────────────────────────────────────

class TestLoadGeneration:
    def test_tokens_increase(self):
        generation = LoadGeneration()
        first = generation.next()
        second = generation.next()
        assert second == first + 1
        assert generation.is_current(second)
        assert not generation.is_current(first)

    async def test_next_cancels_tracked_tasks(self):
        generation = LoadGeneration()
        generation.next()
        task = generation.track(asyncio.create_task(asyncio.sleep(10)))

        generation.next()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()

    async def test_finished_tasks_are_not_counted(self):
        generation = LoadGeneration()
        task = generation.track(asyncio.create_task(asyncio.sleep(0)))
        await task
        assert generation.cancel_tracked() == 0


# ── RequestDeduplicator ──────────────────────────────────────────────────────────

class TestRequestDeduplicator:
    async def test_concurrent_callers_share_one_call(self):
        dedup = RequestDeduplicator()
        calls = 0

        async def fetch() -> str:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return "body"

        results = await asyncio.gather(*(dedup.dedupe("k", fetch) for _ in range(4)))

        assert results == ["body"] * 4
        assert calls == 1
        stats = dedup.get_stats()
        assert stats.started == 1
        assert stats.joined == 3
        assert stats.in_flight == 0

    async def test_key_released_after_settle(self):
        dedup = RequestDeduplicator()
        calls = 0

        async def fetch() -> int:
            nonlocal calls
            calls += 1
            return calls

        assert await dedup.dedupe("k", fetch) == 1
        assert await dedup.dedupe("k", fetch) == 2
        assert dedup.get_in_flight_count() == 0

    async def test_failure_reaches_every_caller(self):
        dedup = RequestDeduplicator()

        async def fetch():
            await asyncio.sleep(0.01)
            raise ValueError("upstream broke")

        results = await asyncio.gather(
            dedup.dedupe("k", fetch), dedup.dedupe("k", fetch), return_exceptions=True
        )
        assert all(isinstance(r, ValueError) for r in results)

    async def test_cancel_all(self):
        dedup = RequestDeduplicator()
        waiter = asyncio.create_task(dedup.dedupe("k", lambda: asyncio.sleep(10)))
        await asyncio.sleep(0)

        assert await dedup.cancel_all() == 1
        with pytest.raises(asyncio.CancelledError):
            await waiter


# ── ResponseCache ────────────────────────────────────────────────────────────────

class TestResponseCache:
    async def test_fresh_then_stale_then_gone(self, dt_clock):
        cache = ResponseCache(default_ttl=timedelta(minutes=1), clock=dt_clock)
        await cache.set("k", {"v": 1})

        hit = await cache.get("k")
        assert hit.data == {"v": 1}
        assert not hit.is_stale

        dt_clock.advance(seconds=90)
        hit = await cache.get("k")
        assert hit.is_stale

        dt_clock.advance(seconds=31)
        assert await cache.get("k") is None

    async def test_without_stale_window(self, dt_clock):
        cache = ResponseCache(
            default_ttl=timedelta(minutes=1), stale_while_revalidate=False, clock=dt_clock
        )
        await cache.set("k", 1)
        dt_clock.advance(seconds=61)
        assert await cache.get("k") is None

    async def test_evicts_oldest_when_full(self, dt_clock):
        cache = ResponseCache(max_size=2, clock=dt_clock)
        await cache.set("a", 1)
        dt_clock.advance(seconds=1)
        await cache.set("b", 2)
        dt_clock.advance(seconds=1)
        await cache.set("c", 3)

        assert await cache.get("a") is None
        assert (await cache.get("c")).data == 3
        assert cache.get_stats().evictions == 1

    async def test_invalidate_by_fragment(self, dt_clock):
        cache = ResponseCache(clock=dt_clock)
        await cache.set("finnhub:SPY", 1)
        await cache.set("finnhub:QQQ", 2)
        await cache.set("coingecko:btc", 3)

        assert await cache.invalidate("finnhub") == 2
        assert await cache.get("coingecko:btc") is not None

    def test_make_key(self):
        cache = ResponseCache(prefix="svc_")
        assert cache.make_key("https://x/q", {"b": 2, "a": 1}) == "svc_https://x/q?a=1&b=2"

        long_key = cache.make_key("https://x/" + "p" * 300)
        assert long_key.startswith("svc_")
        assert len(long_key) == len("svc_") + 32


# ── FeedHealthRegistry ───────────────────────────────────────────────────────────

class TestFeedHealth:
    def test_skip_after_five_failures_within_retry_window(self, clock):
        health = FeedHealthRegistry(clock=clock)
        for _ in range(4):
            health.update("tech", "Feed", False, 100, "timeout")
        assert not health.should_skip("tech", "Feed")

        health.update("tech", "Feed", False, 100, "timeout")
        assert health.should_skip("tech", "Feed")

        clock.advance(59 * 60)
        assert health.should_skip("tech", "Feed")

        clock.advance(60)
        assert not health.should_skip("tech", "Feed")

    def test_success_clears_failures(self, clock):
        health = FeedHealthRegistry(clock=clock)
        for _ in range(5):
            health.update("tech", "Feed", False, 100)
        state = health.update("tech", "Feed", True, 200)

        assert state.consecutive_failures == 0
        assert state.last_error is None
        assert not health.should_skip("tech", "Feed")

    def test_rolling_response_time(self, clock):
        """First success sets the average; later ones blend 80/20."""
        health = FeedHealthRegistry(clock=clock)
        health.update("tech", "Feed", True, 100)
        state = health.update("tech", "Feed", True, 200)
        assert state.avg_response_time_ms == pytest.approx(120.0)

    def test_failure_default_error(self, clock):
        health = FeedHealthRegistry(clock=clock)
        state = health.update("tech", "Feed", False, 100)
        assert state.last_error == "Unknown error"
        assert state.total_requests == 1
        assert state.total_successes == 0

    async def test_flushed_to_store(self, clock):
        store = InMemoryStore()
        health = FeedHealthRegistry(store=store, clock=clock)
        health.update("tech", "Feed", False, 50, "boom")
        assert store.get(FeedHealthRegistry.STORAGE_KEY) is None

        await health.flush()

        stored = store.get(FeedHealthRegistry.STORAGE_KEY)
        assert stored[health_key("tech", "Feed")]["last_error"] == "boom"
        restored = FeedHealthRegistry(store=store, clock=clock).get("tech", "Feed")
        assert restored.consecutive_failures == 1

    async def test_store_read_once_and_written_once_per_flush(self, clock):
        """Lookups and updates between flushes never touch the store."""
        store = MagicMock(wraps=InMemoryStore())
        health = FeedHealthRegistry(store=store, clock=clock)
        for name in ("A", "B", "C"):
            health.should_skip("tech", name)
            health.update("tech", name, True, 10)

        assert store.get.call_count == 1
        assert store.set.call_count == 0

        await health.flush()
        await health.flush()

        assert store.set.call_count == 1
        assert set(store.get(FeedHealthRegistry.STORAGE_KEY)) == {
            health_key("tech", name) for name in ("A", "B", "C")
        }

    async def test_failed_flush_retried(self, clock):
        store = MagicMock(wraps=InMemoryStore())
        store.set.side_effect = [OSError("disk full"), None]
        health = FeedHealthRegistry(store=store, clock=clock)
        health.update("tech", "Feed", True, 10)

        await health.flush()
        await health.flush()

        assert store.set.call_count == 2

    def test_feeds_tracked_independently(self, clock):
        health = FeedHealthRegistry(max_failures=1, clock=clock)
        health.update("tech", "A", False, 10)
        assert health.should_skip("tech", "A")
        assert not health.should_skip("tech", "B")
        assert not health.should_skip("finance", "A")
