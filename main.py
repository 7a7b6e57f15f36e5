"""
Situation monitor entry point.

Fetches feeds and markets on a schedule, runs correlation and narrative
analysis after each news refresh, and logs new alerts.
"""

import asyncio
from datetime import timedelta

from loguru import logger

from monitor.alerts.engine import AlertEngine
from monitor.analysis.correlation import CorrelationEngine
from monitor.analysis.history import CorrelationHistory, JsonFileStore
from monitor.analysis.narrative import NarrativeTracker
from monitor.datasource.crypto.coingecko import CoinGeckoSource
from monitor.datasource.markets.finnhub import FinnhubSource
from monitor.datasource.rss.feeds import load_feeds_config
from monitor.datasource.rss.fetcher import FeedFetcher
from monitor.datasource.scheduler import MonitorScheduler, NewsRefresher
from monitor.datastore.engine import close_db, get_session_factory, init_db
from monitor.services.circuit_breaker import CircuitBreakerConfig
from monitor.services.client import close_service_client
from monitor.services.feed_health import FeedHealthRegistry
from monitor.settings import global_settings


def build_scheduler() -> tuple[MonitorScheduler, FeedFetcher]:
    settings = global_settings
    session_factory = get_session_factory()
    store = JsonFileStore(settings.history_store_path)

    fetcher = FeedFetcher(
        load_feeds_config(settings.feeds_config_path),
        health=FeedHealthRegistry(
            store=store,
            max_failures=settings.feed_health_max_failures,
            retry_after_ms=settings.feed_health_retry_minutes * 60_000,
        ),
        breaker_config=CircuitBreakerConfig(
            failure_threshold=settings.feed_breaker_failures,
            reset_timeout=timedelta(seconds=settings.feed_breaker_reset_seconds),
        ),
    )

    correlation_engine = CorrelationEngine(history=CorrelationHistory(store))
    narrative_tracker = NarrativeTracker()

    scheduler = MonitorScheduler(
        NewsRefresher(fetcher, session_factory=session_factory),
        finnhub=FinnhubSource(
            breaker_config=CircuitBreakerConfig(
                failure_threshold=settings.finnhub_breaker_failures,
                reset_timeout=timedelta(seconds=settings.finnhub_breaker_reset_seconds),
            )
        ),
        coingecko=CoinGeckoSource(),
        correlation_engine=correlation_engine,
        narrative_tracker=narrative_tracker,
        alert_engine=AlertEngine(correlation_engine, narrative_tracker),
        session_factory=session_factory,
    )
    return scheduler, fetcher


async def main() -> None:
    logger.info("Starting situation monitor...")
    scheduler = None
    fetcher = None

    try:
        await init_db()
        scheduler, fetcher = build_scheduler()
        scheduler.start()

        logger.info("Performing initial fetch...")
        await scheduler.fetch_all_now()

        logger.info("Monitor is running. Press Ctrl+C to stop.")
        while True:
            await asyncio.sleep(60)

    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Received interrupt signal, shutting down...")
    except Exception as e:
        logger.error(f"Error in main loop: {e}")
    finally:
        if scheduler is not None:
            scheduler.stop()
        if fetcher is not None:
            await fetcher.close()
        await close_service_client()
        await close_db()
        logger.info("Monitor stopped")


if __name__ == "__main__":
    asyncio.run(main())
