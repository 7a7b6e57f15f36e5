"""
Database models, SQLAlchemy 2.0 declarative mapping.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, String, Text
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(AsyncAttrs, DeclarativeBase):
    pass


class NewsItemDB(Base):
    """Parsed feed items; the id is the stable rss-<category>-<source>-<hash>."""

    __tablename__ = "news_items"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(1000), nullable=False)
    link: Mapped[str] = mapped_column(String(1000), nullable=False)
    pub_date: Mapped[str | None] = mapped_column(String(100), nullable=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_alert: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    alert_keyword: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    topics_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False
    )

    __table_args__ = (Index("idx_news_category_timestamp", "category", "timestamp"),)

    def __repr__(self) -> str:
        return f"<NewsItem(category={self.category}, title={self.title[:50]})>"


class MarketSnapshotDB(Base):
    """Latest JSON payload per market key (indices, sectors, commodities, crypto)."""

    __tablename__ = "market_snapshots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    data_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )


class MetaDB(Base):
    """Small JSON values: per-category checkpoints."""

    __tablename__ = "meta"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )
