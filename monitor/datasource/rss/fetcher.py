"""
Category fetcher for RSS/Atom feeds.

Per feed, before any network I/O: feed health skip check, then the feed's
circuit breaker. Every failure ends as an empty list for that feed; a
category never fails because one of its feeds did.
"""

import asyncio
import time
from collections.abc import Callable

import httpx
from loguru import logger

from monitor.analysis.types import NewsItem
from monitor.datasource.rss.feeds import FeedsConfig, FeedSource
from monitor.datasource.rss.news_filter import filter_by_age
from monitor.datasource.rss.parser import parse_feed
from monitor.services.circuit_breaker import (
    FEED_BREAKER_CONFIG,
    CircuitBreakerConfig,
    CircuitBreakerRegistry,
)
from monitor.services.deduplicator import RequestDeduplicator
from monitor.services.errors import ServiceError
from monitor.services.feed_health import FeedHealthRegistry
from monitor.services.pool import run_pool
from monitor.settings import global_settings

ACCEPT_FEEDS = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"


class FeedFetcher:
    def __init__(
        self,
        feeds: FeedsConfig,
        http_client: httpx.AsyncClient | None = None,
        health: FeedHealthRegistry | None = None,
        breakers: CircuitBreakerRegistry | None = None,
        breaker_config: CircuitBreakerConfig = FEED_BREAKER_CONFIG,
        timeout: float | None = None,
        concurrency: int | None = None,
        max_age_days: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.feeds = feeds
        self._http_client = http_client
        self._owns_client = http_client is None
        self.health = health or FeedHealthRegistry()
        self.breakers = breakers or CircuitBreakerRegistry()
        self.breaker_config = breaker_config
        self.timeout = timeout or global_settings.feed_timeout_seconds
        self.concurrency = concurrency or global_settings.feed_concurrency
        self.max_age_days = max_age_days or global_settings.news_max_age_days
        self._deduplicator = RequestDeduplicator(debug=global_settings.debug)
        self._clock = clock

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                follow_redirects=True, headers={"Accept": ACCEPT_FEEDS}
            )
        return self._http_client

    async def _download(self, url: str) -> bytes:
        try:
            async with asyncio.timeout(self.timeout):
                response = await self._client().get(url, timeout=self.timeout)
                if response.status_code >= 400:
                    raise ServiceError(f"HTTP {response.status_code}", service_id=url)
                return response.content
        except TimeoutError as e:
            raise ServiceError(f"Timed out after {self.timeout}s", service_id=url) from e

    async def fetch_feed(self, feed: FeedSource, category: str) -> list[NewsItem]:
        if self.health.should_skip(category, feed.name):
            logger.debug(f"{category}/{feed.name}: skipped, feed unhealthy")
            return []

        breaker = self.breakers.get(f"feed:{category}:{feed.name}", self.breaker_config)
        if not breaker.can_request():
            logger.debug(f"{category}/{feed.name}: skipped, circuit open")
            return []

        url = str(feed.url)
        start = time.monotonic()
        try:
            content = await self._deduplicator.dedupe(url, lambda: self._download(url))
            items = parse_feed(content, feed.name, category, int(self._clock() * 1000))
        except asyncio.CancelledError:
            breaker.release_trial()
            raise
        except Exception as e:
            elapsed_ms = (time.monotonic() - start) * 1000
            error = str(e) or type(e).__name__
            breaker.record_failure()
            self.health.update(category, feed.name, False, elapsed_ms, error)
            logger.warning(f"{category}/{feed.name}: fetch failed: {error}")
            return []

        elapsed_ms = (time.monotonic() - start) * 1000
        breaker.record_success()
        self.health.update(category, feed.name, True, elapsed_ms)
        if items:
            logger.debug(f"{category}/{feed.name}: {len(items)} items")
        else:
            logger.warning(f"{category}/{feed.name}: 0 items ({len(content)} bytes)")
        return items

    async def fetch_category(
        self, category: str, feeds: list[FeedSource] | None = None
    ) -> list[NewsItem]:
        """All feeds of a category through the pool, recent items newest first."""
        category_feeds = feeds if feeds is not None else self.feeds.feeds_for(category)
        results = await run_pool(
            [lambda f=feed: self.fetch_feed(f, category) for feed in category_feeds],
            self.concurrency,
        )
        items = [item for feed_items in results for item in feed_items]
        recent = filter_by_age(items, self.max_age_days, int(self._clock() * 1000))
        recent.sort(key=lambda i: i.timestamp, reverse=True)
        await self.health.flush()
        logger.info(f"{category}: {len(recent)} items from {len(category_feeds)} feeds")
        return recent

    def get_breaker_status(self) -> dict[str, dict]:
        return self.breakers.get_all_status()

    async def close(self) -> None:
        await self._deduplicator.cancel_all()
        await self.health.flush()
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
