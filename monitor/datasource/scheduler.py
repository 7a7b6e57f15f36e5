"""
Refresh scheduling - news and market jobs plus the analysis pass after each
news refresh.
"""

import asyncio
import time
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from monitor.alerts.engine import AlertEngine, AlertPopup
from monitor.analysis.correlation import CorrelationEngine, get_correlation_engine
from monitor.analysis.narrative import NarrativeTracker, get_narrative_tracker
from monitor.analysis.types import CorrelationResults, NarrativeResults, NewsItem
from monitor.datasource.crypto.coingecko import CoinGeckoSource
from monitor.datasource.markets.aggregate import MarketSnapshot, fetch_all_markets
from monitor.datasource.markets.finnhub import FinnhubSource
from monitor.datasource.rss.fetcher import FeedFetcher
from monitor.datasource.rss.news_filter import deduplicate_news
from monitor.datastore.repositories import MarketRepository, MetaRepository, NewsRepository
from monitor.services.generation import LoadGeneration
from monitor.settings import global_settings
from monitor.utils import safe_func_wrapper


class RefreshReport(BaseModel):
    generation: int
    duration_ms: int = 0
    applied: dict[str, int] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)
    superseded: bool = False


class AnalysisOutcome(BaseModel):
    item_count: int = 0
    correlation: CorrelationResults | None = None
    narratives: NarrativeResults | None = None
    alerts: list[AlertPopup] = Field(default_factory=list)


class NewsRefresher:
    """
    Refreshes categories one after another.

    Each refresh takes a new generation token, which cancels the in-flight
    category fetch of the previous refresh. A category's items are applied
    only while the token is still current; categories applied earlier stay.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        category_delay_ms: int | None = None,
    ):
        self.fetcher = fetcher
        self.session_factory = session_factory
        self.category_delay_ms = (
            category_delay_ms
            if category_delay_ms is not None
            else global_settings.category_delay_ms
        )
        self.generation = LoadGeneration()
        self.latest: dict[str, list[NewsItem]] = {}

    async def refresh(self, categories: list[str] | None = None) -> RefreshReport:
        token = self.generation.next()
        targets = categories if categories is not None else self.fetcher.feeds.category_names
        report = RefreshReport(generation=token)
        start = time.monotonic()

        for i, category in enumerate(targets):
            if i:
                await asyncio.sleep(self.category_delay_ms / 1000)
            if not self.generation.is_current(token):
                report.superseded = True
                break

            task = self.generation.track(
                asyncio.create_task(self.fetcher.fetch_category(category))
            )
            try:
                items = await task
            except asyncio.CancelledError:
                if self.generation.is_current(token):
                    raise
                report.superseded = True
                break

            if not self.generation.is_current(token):
                report.superseded = True
                break

            try:
                await self._apply(category, items)
            except SQLAlchemyError as e:
                report.errors.append(f"{category}: {e}")
                logger.error(f"Failed to store {category}: {e}")
            report.applied[category] = len(items)

        report.duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            f"News refresh #{token}: {sum(report.applied.values())} items in "
            f"{len(report.applied)} categories, {report.duration_ms} ms"
            + (" (superseded)" if report.superseded else "")
        )
        return report

    async def _apply(self, category: str, items: list[NewsItem]) -> None:
        self.latest[category] = items
        if self.session_factory is None or not items:
            return
        async with self.session_factory() as session:
            await NewsRepository(session).upsert_items(items)
            await MetaRepository(session).set(f"checkpoint:{category}", items[0].timestamp)
            await session.commit()

    def all_items(self) -> list[NewsItem]:
        merged = [item for items in self.latest.values() for item in items]
        merged.sort(key=lambda i: i.timestamp, reverse=True)
        return deduplicate_news(merged)


class MonitorScheduler:
    def __init__(
        self,
        refresher: NewsRefresher,
        finnhub: FinnhubSource | None = None,
        coingecko: CoinGeckoSource | None = None,
        correlation_engine: CorrelationEngine | None = None,
        narrative_tracker: NarrativeTracker | None = None,
        alert_engine: AlertEngine | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self.scheduler = AsyncIOScheduler()
        self._is_running = False

        self.refresher = refresher
        self.finnhub = finnhub
        self.coingecko = coingecko
        self.correlation_engine = correlation_engine or get_correlation_engine()
        self.narrative_tracker = narrative_tracker or get_narrative_tracker()
        self.alert_engine = alert_engine or AlertEngine(
            self.correlation_engine, self.narrative_tracker
        )
        self.session_factory = session_factory

        self.latest_markets: MarketSnapshot | None = None
        self.last_outcome: AnalysisOutcome | None = None

    async def _load_window(self) -> list[NewsItem]:
        if self.session_factory is None:
            return self.refresher.all_items()
        async with self.session_factory() as session:
            items = await NewsRepository(session).get_recent(
                global_settings.analysis_window_hours
            )
        return deduplicate_news(items)

    @safe_func_wrapper
    async def run_analysis(self) -> AnalysisOutcome:
        items = await self._load_window()
        correlation = self.correlation_engine.analyze(items)
        narratives = self.narrative_tracker.analyze(items)
        alerts = self.alert_engine.detect(
            items, self.latest_markets, correlation=correlation, narratives=narratives
        )

        outcome = AnalysisOutcome(
            item_count=len(items),
            correlation=correlation,
            narratives=narratives,
            alerts=alerts,
        )
        summary = self.correlation_engine.get_summary(correlation)
        narrative_summary = self.narrative_tracker.get_summary(narratives)
        logger.info(
            f"Analysis over {len(items)} items: correlation {summary.status}, "
            f"narratives {narrative_summary.status}, {len(alerts)} alerts"
        )
        for popup in alerts:
            logger.info(f"[{popup.severity}] {popup.type} x{popup.count}: {popup.detail}")
        self.last_outcome = outcome
        return outcome

    async def _news_job(self) -> None:
        try:
            report = await self.refresher.refresh()
            if not report.superseded:
                await self.run_analysis()
        except Exception as e:
            logger.error(f"News job failed: {e}")

    async def _market_job(self) -> None:
        if self.finnhub is None or self.coingecko is None:
            return
        try:
            snapshot = await fetch_all_markets(self.finnhub, self.coingecko)
            self.latest_markets = snapshot
            if self.session_factory is not None:
                async with self.session_factory() as session:
                    repo = MarketRepository(session)
                    for key in ("indices", "sectors", "commodities", "crypto"):
                        await repo.set(
                            key, [m.model_dump() for m in getattr(snapshot, key)]
                        )
                    await session.commit()
        except Exception as e:
            logger.error(f"Market job failed: {e}")

    def start(self) -> None:
        if self._is_running:
            logger.warning("MonitorScheduler is already running")
            return

        settings = global_settings
        self.scheduler.add_job(
            self._news_job,
            trigger="interval",
            minutes=settings.news_refresh_interval_minutes,
            id="news_refresh",
            name="News Refresh",
            replace_existing=True,
            max_instances=2,
        )
        logger.info(f"News job: every {settings.news_refresh_interval_minutes} min")

        if self.finnhub is not None and self.coingecko is not None:
            self.scheduler.add_job(
                self._market_job,
                trigger="interval",
                minutes=settings.market_refresh_interval_minutes,
                id="market_refresh",
                name="Market Refresh",
                replace_existing=True,
            )
            logger.info(
                f"Market job: every {settings.market_refresh_interval_minutes} min"
            )

        self.scheduler.start()
        self._is_running = True
        logger.info("MonitorScheduler started")

    def stop(self) -> None:
        if not self._is_running:
            return
        self.scheduler.shutdown(wait=False)
        self._is_running = False
        logger.info("MonitorScheduler stopped")

    async def fetch_all_now(self) -> None:
        """Initial fetch at startup: markets and news concurrently, then analysis."""
        await asyncio.gather(self._market_job(), self._news_job())

    def get_status(self) -> dict[str, Any]:
        jobs = []
        if self._is_running:
            for job in self.scheduler.get_jobs():
                jobs.append(
                    {
                        "id": job.id,
                        "name": job.name,
                        "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
                    }
                )
        return {
            "running": self._is_running,
            "jobs": jobs,
            "generation": self.refresher.generation.current,
            "categories": {c: len(i) for c, i in self.refresher.latest.items()},
            "feed_breakers": self.refresher.fetcher.get_breaker_status(),
            "markets_updated_at": self.latest_markets.updated_at if self.latest_markets else None,
        }
