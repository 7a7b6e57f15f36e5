"""Shared pytest fixtures for the monitor tests.

- Clocks are fixed or steppable so time-based logic is deterministic
- make_item builds NewsItem objects with sensible defaults
- No real external HTTP calls are made; HTTP goes through httpx.MockTransport
"""

from __future__ import annotations

from datetime import datetime, timedelta
from itertools import count

import pytest

from monitor.analysis.correlation import CorrelationEngine
from monitor.analysis.history import CorrelationHistory, NarrativeHistory
from monitor.analysis.narrative import NarrativeTracker
from monitor.analysis.types import NewsItem

# Start of an hour, so runs a few minutes apart stay in the same hour bucket
BASE_EPOCH = 1_700_000_000 // 3600 * 3600

_ids = count(1)


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, start: float = BASE_EPOCH):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDateTimeClock:
    """datetime clock for components that work in datetimes."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_item(
    title: str,
    source: str = "Example Wire",
    timestamp: int | None = None,
    **kwargs,
) -> NewsItem:
    n = next(_ids)
    return NewsItem(
        id=kwargs.pop("id", f"item-{n}"),
        title=title,
        source=source,
        link=kwargs.pop("link", f"https://example.com/{n}"),
        timestamp=timestamp if timestamp is not None else BASE_EPOCH * 1000,
        **kwargs,
    )


# ── Clocks ───────────────────────────────────────────────────────────────────────

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dt_clock() -> FakeDateTimeClock:
    return FakeDateTimeClock()


# ── Engines with isolated history ────────────────────────────────────────────────

@pytest.fixture
def correlation_engine(clock) -> CorrelationEngine:
    """Engine with its own in-memory history and a fixed clock."""
    return CorrelationEngine(history=CorrelationHistory(), clock=clock)


@pytest.fixture
def narrative_tracker(clock) -> NarrativeTracker:
    return NarrativeTracker(history=NarrativeHistory(), clock=clock)


# ── Sample batches ───────────────────────────────────────────────────────────────

@pytest.fixture
def ukraine_items() -> list[NewsItem]:
    """Three Ukraine headlines from three distinct sources."""
    return [
        make_item("Ukraine announces new policy", source="Reuters"),
        make_item("Ukraine military update", source="BBC World"),
        make_item("Zelensky addresses nation", source="CNN"),
    ]


@pytest.fixture
def sample_feed_xml() -> bytes:
    """RSS 2.0 document with two usable entries and one without a link."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Wire</title>
    <link>https://example.com</link>
    <item>
      <title>Missile strike reported near Kyiv</title>
      <link>https://example.com/a</link>
      <description>&lt;p&gt;Officials in &lt;b&gt;Ukraine&lt;/b&gt; confirmed the attack.&lt;/p&gt;</description>
      <pubDate>Tue, 14 Nov 2023 22:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Markets drift ahead of Fed decision</title>
      <link>https://example.com/b</link>
      <description>Traders wait for the interest rate call.</description>
      <pubDate>Tue, 14 Nov 2023 21:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Entry without a link</title>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def make_news():
    """Factory for NewsItem objects, see make_item."""
    return make_item
