"""
RSS/Atom ingest: feed config, parsing, filtering, and the category fetcher.
"""

from monitor.datasource.rss.feeds import FeedsConfig, FeedSource, load_feeds_config
from monitor.datasource.rss.fetcher import FeedFetcher
from monitor.datasource.rss.news_filter import (
    deduplicate_news,
    filter_by_age,
    filter_news,
    merge_news_items,
)
from monitor.datasource.rss.parser import parse_feed

__all__ = [
    "FeedFetcher",
    "FeedSource",
    "FeedsConfig",
    "deduplicate_news",
    "filter_by_age",
    "filter_news",
    "load_feeds_config",
    "merge_news_items",
    "parse_feed",
]
