"""
Narrative tracker - mainstream narrative trends and fringe-to-mainstream
propagation.

Two passes run over the same batch:
- mainstream: regex narratives with momentum and a coarse sentiment read
- fringe: keyword narratives bucketed by where they are being carried
"""

import re
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

from loguru import logger

from monitor.analysis.config import SourceType, classify_source
from monitor.analysis.history import NarrativeHistory
from monitor.analysis.matchers import any_match
from monitor.analysis.narrative_patterns import (
    MAINSTREAM_NARRATIVE_PATTERNS,
    NARRATIVE_PATTERNS,
    MainstreamNarrativePattern,
    NarrativePattern,
)
from monitor.analysis.types import (
    EmergingFringe,
    FringeToMainstream,
    NarrativeData,
    NarrativeResults,
    NarrativeSummary,
    NewsItem,
    TrendingNarrative,
    as_news_item,
)

MIN_TRENDING_MENTIONS = 2
MAX_SOURCES = 5
MAX_HEADLINES = 3

# Momentum compares the current count with the mean of this many prior counts
MOMENTUM_PRIOR_WINDOW = 2
RISING_RATIO = 1.2
FALLING_RATIO = 0.8

POSITIVE_PATTERN = re.compile(
    r"surge|gain|rise|boost|rally|success|breakthrough|win|grow", re.IGNORECASE
)
NEGATIVE_PATTERN = re.compile(
    r"crash|fall|drop|crisis|fear|risk|warn|threat|fail|lose|plunge|slump|loom|weak",
    re.IGNORECASE,
)

Momentum = Literal["rising", "stable", "falling"]
Sentiment = Literal["positive", "neutral", "negative"]


def format_narrative_name(narrative_id: str) -> str:
    return narrative_id.replace("-", " ").title()


def calculate_momentum(counts: Sequence[int]) -> Momentum:
    """
    Momentum of the newest count against the counts just before it.

    ``counts`` is oldest first and ends with the current observation.
    """
    if len(counts) < 2:
        return "stable"
    current = counts[-1]
    prior = list(counts[-(MOMENTUM_PRIOR_WINDOW + 1) : -1])
    if len(prior) < MOMENTUM_PRIOR_WINDOW:
        return "stable"

    avg_previous = sum(prior) / len(prior)
    if current > avg_previous * RISING_RATIO:
        return "rising"
    if current < avg_previous * FALLING_RATIO:
        return "falling"
    return "stable"


def estimate_sentiment(items: Sequence[NewsItem]) -> Sentiment:
    positive = 0
    negative = 0
    for item in items:
        text = item.text
        if POSITIVE_PATTERN.search(text):
            positive += 1
        if NEGATIVE_PATTERN.search(text):
            negative += 1

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def _distinct(values: Sequence[str], limit: int) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value not in seen:
            seen[value] = None
            if len(seen) >= limit:
                break
    return list(seen)


class NarrativeTracker:
    """Tracks mainstream narratives and fringe narrative crossover."""

    def __init__(
        self,
        history: NarrativeHistory | None = None,
        mainstream_patterns: Sequence[MainstreamNarrativePattern] = MAINSTREAM_NARRATIVE_PATTERNS,
        fringe_patterns: Sequence[NarrativePattern] = NARRATIVE_PATTERNS,
        clock: Callable[[], float] = time.time,
    ):
        self.history = history if history is not None else NarrativeHistory()
        self.mainstream_patterns = list(mainstream_patterns)
        self.fringe_patterns = list(fringe_patterns)
        self._clock = clock

    def _analyze_mainstream(
        self, items: Sequence[NewsItem], now_ms: int
    ) -> list[TrendingNarrative]:
        results: list[TrendingNarrative] = []

        for pattern in self.mainstream_patterns:
            matches = [item for item in items if any_match(pattern.patterns, item.text)]
            if len(matches) < MIN_TRENDING_MENTIONS:
                continue

            sources = {m.source for m in matches}
            with self.history.lock:
                entry = self.history.record_count(pattern.id, now_ms, len(matches), sources)
                counts = [c for _, c in entry.counts]
                first_seen = entry.first_seen

            results.append(
                TrendingNarrative(
                    id=pattern.id,
                    name=pattern.name,
                    category=pattern.category,
                    region=pattern.region,
                    count=len(matches),
                    sources=_distinct([m.source for m in matches], MAX_SOURCES),
                    headlines=matches[:MAX_HEADLINES],
                    momentum=calculate_momentum(counts),
                    sentiment=estimate_sentiment(matches),
                    first_seen=first_seen,
                )
            )

        results.sort(key=lambda n: n.count, reverse=True)
        return results

    def _analyze_fringe(self, items: Sequence[NewsItem], now_ms: int, results: NarrativeResults) -> None:
        for narrative in self.fringe_patterns:
            matches: list[NewsItem] = []
            by_type: dict[SourceType, int] = {t: 0 for t in SourceType}

            for item in items:
                if not any_match(narrative.keywords, item.text):
                    continue
                matches.append(item)
                source_type = classify_source(item.source)
                if source_type is not None:
                    by_type[source_type] += 1

            if not matches:
                continue

            entry = self.history.touch(
                f"fringe-{narrative.id}", now_ms, {m.source for m in matches}
            )

            data = NarrativeData(
                id=narrative.id,
                name=format_narrative_name(narrative.id),
                category=narrative.category,
                severity=narrative.severity,
                count=len(matches),
                fringe_count=by_type[SourceType.FRINGE],
                alternative_count=by_type[SourceType.ALTERNATIVE],
                mainstream_count=by_type[SourceType.MAINSTREAM],
                sources=_distinct([m.source for m in matches], MAX_SOURCES),
                headlines=matches[:MAX_HEADLINES],
                keywords=narrative.keyword_list,
                first_seen=entry.first_seen,
            )
            fields = data.model_dump(exclude={"headlines"})

            if data.mainstream_count > 0 and data.fringe_count > 0:
                results.fringe_to_mainstream.append(
                    FringeToMainstream(
                        **fields,
                        headlines=data.headlines,
                        crossover_level=data.mainstream_count / data.count,
                    )
                )
            elif narrative.severity == "disinfo":
                results.disinfo_signals.append(data)
            elif data.fringe_count > 0 or data.alternative_count > 0:
                if data.count >= 5:
                    status = "viral"
                elif data.count >= 3:
                    status = "spreading"
                else:
                    status = "emerging"
                results.emerging_fringe.append(
                    EmergingFringe(**fields, headlines=data.headlines, status=status)
                )
            else:
                results.narrative_watch.append(data)

        results.emerging_fringe.sort(key=lambda n: n.count, reverse=True)
        results.fringe_to_mainstream.sort(key=lambda n: n.crossover_level, reverse=True)
        results.narrative_watch.sort(key=lambda n: n.count, reverse=True)
        results.disinfo_signals.sort(key=lambda n: n.count, reverse=True)

    def analyze(
        self, news_items: Sequence[NewsItem | Mapping[str, Any]] | None
    ) -> NarrativeResults | None:
        """Analyze narratives across all news items. None for an empty batch."""
        if not news_items:
            return None

        items = [
            item
            for item in (as_news_item(raw) for raw in news_items)
            if item is not None and item.title
        ]
        now_ms = int(self._clock() * 1000)

        results = NarrativeResults()
        results.trending_narratives = self._analyze_mainstream(items, now_ms)
        self._analyze_fringe(items, now_ms, results)

        logger.info(
            f"Narratives: {len(results.trending_narratives)} trending, "
            f"{len(results.fringe_to_mainstream)} crossing, "
            f"{len(results.emerging_fringe)} fringe, "
            f"{len(results.disinfo_signals)} disinfo"
        )
        return results

    def get_summary(self, results: NarrativeResults | None) -> NarrativeSummary:
        if results is None:
            return NarrativeSummary(total=0, status="NO DATA")
        return NarrativeSummary(
            total=results.total,
            status=results.status,
            top_trending=[n.name for n in results.trending_narratives[:3]],
            crossovers=[n.name for n in results.fringe_to_mainstream[:3]],
        )

    def clear_history(self) -> None:
        self.history.clear()


_default_tracker = NarrativeTracker()


def get_narrative_tracker() -> NarrativeTracker:
    """Process-wide tracker used by the module-level helpers."""
    return _default_tracker


def analyze_narratives(
    news_items: Sequence[NewsItem | Mapping[str, Any]] | None,
) -> NarrativeResults | None:
    return _default_tracker.analyze(news_items)


def get_narrative_summary(results: NarrativeResults | None) -> NarrativeSummary:
    return _default_tracker.get_summary(results)


def clear_narrative_history() -> None:
    _default_tracker.clear_history()
