"""
Dedup, age and variety filters over parsed news items.
"""

import time
from collections.abc import Iterable

from monitor.analysis.types import NewsItem

DAY_MS = 24 * 60 * 60 * 1000
SIMILARITY_THRESHOLD = 0.6
MIN_WORD_LENGTH = 4


def _significant_words(title: str) -> set[str]:
    return {w for w in title.lower().split() if len(w) >= MIN_WORD_LENGTH}


def title_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the words longer than three characters."""
    words_a = _significant_words(a)
    words_b = _significant_words(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def deduplicate_news(items: Iterable[NewsItem]) -> list[NewsItem]:
    """
    Keep the first of each link and drop near-duplicate titles.

    Order is preserved, so callers that want the newest copy kept pass
    newest first.
    """
    kept: list[NewsItem] = []
    seen_links: set[str] = set()
    for item in items:
        if item.link and item.link in seen_links:
            continue
        if any(
            title_similarity(existing.title, item.title) > SIMILARITY_THRESHOLD
            for existing in kept
        ):
            continue
        kept.append(item)
        if item.link:
            seen_links.add(item.link)
    return kept


def filter_by_age(
    items: Iterable[NewsItem], max_age_days: int = 7, now_ms: int | None = None
) -> list[NewsItem]:
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    max_age = max_age_days * DAY_MS
    return [item for item in items if now_ms - item.timestamp <= max_age]


def merge_news_items(
    existing: Iterable[NewsItem], incoming: Iterable[NewsItem], now_ms: int | None = None
) -> list[NewsItem]:
    """Incoming items win over existing duplicates; result is newest first."""
    merged = deduplicate_news([*incoming, *existing])
    return sorted(filter_by_age(merged, now_ms=now_ms), key=lambda i: i.timestamp, reverse=True)


def filter_news(
    items: Iterable[NewsItem],
    max_items: int = 10,
    max_age_days: int = 7,
    max_sources: int = 5,
    now_ms: int | None = None,
) -> list[NewsItem]:
    """
    Recent, deduplicated, source-varied selection for display.

    One item from each of the first ``max_sources`` sources goes in first,
    then remaining slots fill from any source. Result is newest first.
    """
    recent = sorted(
        filter_by_age(items, max_age_days, now_ms), key=lambda i: i.timestamp, reverse=True
    )
    unique: list[NewsItem] = []
    for item in recent:
        if not any(
            title_similarity(existing.title, item.title) > SIMILARITY_THRESHOLD
            for existing in unique
        ):
            unique.append(item)

    picked: list[NewsItem] = []
    picked_ids: set[str] = set()
    sources: set[str] = set()
    for item in unique:
        if len(picked) >= max_items:
            break
        if len(sources) < max_sources and item.source not in sources:
            picked.append(item)
            picked_ids.add(item.id)
            sources.add(item.source)

    for item in unique:
        if len(picked) >= max_items:
            break
        if item.id not in picked_ids:
            picked.append(item)
            picked_ids.add(item.id)

    picked.sort(key=lambda i: i.timestamp, reverse=True)
    return picked
