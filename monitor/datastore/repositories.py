"""
Repository layer over the async session.
"""

import json
import time
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from monitor.analysis.types import NewsItem
from monitor.datastore.models import MarketSnapshotDB, MetaDB, NewsItemDB

RECENT_LIMIT = 200
DAY_MS = 86_400_000


def _row_to_item(row: NewsItemDB) -> NewsItem:
    topics: list[str] = []
    if row.topics_json:
        try:
            topics = json.loads(row.topics_json)
        except json.JSONDecodeError as e:
            logger.warning(f"Bad topics column for {row.id}: {e}")
    return NewsItem(
        id=row.id,
        title=row.title,
        link=row.link,
        pub_date=row.pub_date,
        timestamp=row.timestamp,
        description=row.description,
        source=row.source,
        category=row.category,
        is_alert=row.is_alert,
        alert_keyword=row.alert_keyword,
        region=row.region,
        topics=topics,
    )


class NewsRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_items(self, items: list[NewsItem]) -> int:
        """Insert or replace by id. Returns how many rows were written."""
        for item in items:
            await self.session.merge(
                NewsItemDB(
                    id=item.id,
                    title=item.title,
                    link=item.link,
                    pub_date=item.pub_date,
                    timestamp=item.timestamp,
                    description=item.description,
                    source=item.source,
                    category=item.category,
                    is_alert=item.is_alert,
                    alert_keyword=item.alert_keyword,
                    region=item.region,
                    topics_json=json.dumps(item.topics) if item.topics else None,
                )
            )
        await self.session.flush()
        return len(items)

    async def get_by_category(
        self, category: str, since_ms: int | None = None
    ) -> list[NewsItem]:
        """Newest first; without ``since_ms`` the latest RECENT_LIMIT rows."""
        stmt = select(NewsItemDB).where(NewsItemDB.category == category)
        if since_ms is not None:
            stmt = stmt.where(NewsItemDB.timestamp > since_ms)
        stmt = stmt.order_by(NewsItemDB.timestamp.desc())
        if since_ms is None:
            stmt = stmt.limit(RECENT_LIMIT)
        result = await self.session.execute(stmt)
        return [_row_to_item(row) for row in result.scalars().all()]

    async def get_recent(self, hours: float = 24) -> list[NewsItem]:
        """All categories, newest first."""
        cutoff = int(time.time() * 1000 - hours * 3_600_000)
        result = await self.session.execute(
            select(NewsItemDB)
            .where(NewsItemDB.timestamp >= cutoff)
            .order_by(NewsItemDB.timestamp.desc())
        )
        return [_row_to_item(row) for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(NewsItemDB))
        return int(result.scalar_one())

    async def delete_older_than(self, max_age_days: int) -> int:
        cutoff = int(time.time() * 1000) - max_age_days * DAY_MS
        result = await self.session.execute(
            delete(NewsItemDB).where(NewsItemDB.timestamp < cutoff)
        )
        await self.session.flush()
        deleted = result.rowcount or 0
        if deleted:
            logger.debug(f"Deleted {deleted} news items older than {max_age_days}d")
        return deleted


class MarketRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def set(self, key: str, data: Any) -> None:
        await self.session.merge(
            MarketSnapshotDB(
                key=key, data_json=json.dumps(data), updated_at=datetime.now()
            )
        )
        await self.session.flush()

    async def get(self, key: str) -> tuple[Any, datetime] | None:
        row = await self.session.get(MarketSnapshotDB, key)
        if row is None:
            return None
        return json.loads(row.data_json), row.updated_at


class MetaRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def set(self, key: str, value: Any) -> None:
        await self.session.merge(
            MetaDB(key=key, value_json=json.dumps(value), updated_at=datetime.now())
        )
        await self.session.flush()

    async def get(self, key: str) -> Any | None:
        row = await self.session.get(MetaDB, key)
        return json.loads(row.value_json) if row is not None else None
