"""
Feed document -> NewsItem list.

feedparser handles RSS 2.0 and Atom alike; this module only shapes its
entries into NewsItem with stable ids and keyword annotations.
"""

import re
import time
from datetime import timezone
from typing import Any

import feedparser
from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from loguru import logger

from monitor.analysis.config import (
    contains_alert_keyword,
    detect_region,
    detect_topics,
)
from monitor.analysis.types import NewsItem

MAX_DESCRIPTION_LENGTH = 200
_WHITESPACE = re.compile(r"\s+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def hash_code(value: str) -> str:
    """
    Short base-36 digest of a string, stable across runs.

    The classic ``h = h * 31 + c`` hash over UTF-16 code units wrapped to a
    signed 32-bit int, absolute value in base 36.
    """
    h = 0
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    n = abs(h)
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def source_slug(source_name: str) -> str:
    return _WHITESPACE.sub("-", source_name.lower())


def clean_html(html: str | None) -> str:
    """Plain text of an HTML fragment, whitespace collapsed."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return _WHITESPACE.sub(" ", soup.get_text(" ")).strip()


def parse_timestamp(date_str: str | None, now_ms: int) -> int:
    """Epoch millis of a feed date; naive dates are UTC; unparseable -> now."""
    if not date_str:
        return now_ms
    try:
        dt = date_parser.parse(date_str)
    except (ValueError, OverflowError):
        return now_ms
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def _entry_description(entry: Any) -> str | None:
    for key in ("summary", "description"):
        value = entry.get(key)
        if value:
            return value
    content = entry.get("content")
    if content:
        return content[0].get("value")
    return None


def entry_to_item(
    entry: Any, source_name: str, category: str, now_ms: int
) -> NewsItem | None:
    title = clean_html(entry.get("title"))
    link = entry.get("link") or ""
    if not title or not link:
        return None

    pub_date = entry.get("published") or entry.get("updated")
    raw_description = _entry_description(entry)
    description = (
        clean_html(raw_description)[:MAX_DESCRIPTION_LENGTH] if raw_description else None
    )
    detect_text = f"{title} {description or ''}"
    is_alert, alert_keyword = contains_alert_keyword(title)

    return NewsItem(
        id=f"rss-{category}-{source_slug(source_name)}-{hash_code(link)}",
        title=title,
        link=link,
        pub_date=pub_date,
        timestamp=parse_timestamp(pub_date, now_ms),
        description=description,
        source=source_name,
        category=category,
        is_alert=is_alert,
        alert_keyword=alert_keyword,
        region=detect_region(detect_text),
        topics=detect_topics(detect_text),
    )


def parse_feed(
    content: bytes | str,
    source_name: str,
    category: str,
    now_ms: int | None = None,
) -> list[NewsItem]:
    """Parse one feed document. Entries without a title or link are skipped."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    parsed = feedparser.parse(content)
    if parsed.bozo and not parsed.entries:
        logger.warning(
            f"{category}/{source_name}: unparseable feed ({parsed.bozo_exception})"
        )
        return []

    items = []
    for entry in parsed.entries:
        item = entry_to_item(entry, source_name, category, now_ms)
        if item is not None:
            items.append(item)
    return items
