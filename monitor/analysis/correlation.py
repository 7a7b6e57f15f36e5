"""
Correlation engine - analyzes patterns across news items.

Detects:
- Emerging patterns (topics with 3+ mentions, levelled by z-score)
- Momentum signals (rising topic trends from per-minute velocity)
- Cross-source correlations (same topic across multiple sources)
- Predictive signals (combined score-based predictions)
- Compound signals (several related topics active together)
"""

import math
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, Literal

from loguru import logger

from monitor.analysis.compound_patterns import COMPOUND_PATTERNS, CompoundPattern
from monitor.analysis.config import CORRELATION_TOPICS, CorrelationTopic, get_source_weight
from monitor.analysis.history import CorrelationHistory
from monitor.analysis.types import (
    CompoundLevel,
    CompoundSignal,
    CorrelationResults,
    CorrelationSummary,
    CrossSourceCorrelation,
    EmergingPattern,
    HeadlineRef,
    MomentumLevel,
    MomentumSignal,
    NewsItem,
    PatternLevel,
    PredictiveSignal,
    TopicStats,
    as_news_item,
)

MAX_HEADLINES = 5
VELOCITY_WINDOW = 5


class Prediction(str, Enum):
    """Prediction text attached to predictive signals."""

    MARKET_VOLATILITY = "Market volatility likely in next 24-48h"
    FINANCIAL_COVERAGE = "Expect increased financial sector coverage"
    GEOPOLITICAL_ESCALATION = "Geopolitical escalation narrative forming"
    EMPLOYMENT_CONCERNS = "Employment concerns may dominate news cycle"
    BREAKING_DEVELOPMENTS = "Breaking developments likely within hours"
    MARKET_REACTION = "Market reaction expected"
    SECURITY_POSTURE = "Heightened security posture likely"
    MAINSTREAM_TRACTION = "Topic gaining mainstream traction"


_CATEGORY_PREDICTIONS: dict[str, Prediction] = {
    "Conflict": Prediction.BREAKING_DEVELOPMENTS,
    "Finance": Prediction.MARKET_REACTION,
    "Security": Prediction.SECURITY_POSTURE,
}


def select_prediction(topic: CorrelationTopic, count: int) -> Prediction:
    if topic.id == "tariffs" and count >= 4:
        return Prediction.MARKET_VOLATILITY
    if topic.id == "fed-rates":
        return Prediction.FINANCIAL_COVERAGE
    if "china" in topic.id or "russia" in topic.id:
        return Prediction.GEOPOLITICAL_ESCALATION
    if topic.id == "layoffs":
        return Prediction.EMPLOYMENT_CONCERNS
    return _CATEGORY_PREDICTIONS.get(topic.category, Prediction.MAINSTREAM_TRACTION)


# Statistics


def calculate_z_score(value: float, history_values: Sequence[float]) -> float:
    """Standard score of value against history; 0 on thin or flat history."""
    if len(history_values) < 3:
        return 0.0
    mean = sum(history_values) / len(history_values)
    variance = sum((v - mean) ** 2 for v in history_values) / len(history_values)
    std_dev = math.sqrt(variance)
    if std_dev == 0:
        return 0.0
    return (value - mean) / std_dev


def calculate_velocity(topic_id: str, history: Mapping[int, Mapping[str, int]]) -> float:
    """Mean per-minute change in count over the most recent minute buckets."""
    minutes = sorted(history, reverse=True)
    if len(minutes) < 2:
        return 0.0

    recent = minutes[:VELOCITY_WINDOW]
    deltas = []
    for newer, older in zip(recent, recent[1:]):
        time_diff = newer - older
        if time_diff > 0:
            current = history[newer].get(topic_id, 0)
            previous = history[older].get(topic_id, 0)
            deltas.append((current - previous) / time_diff)

    if not deltas:
        return 0.0
    return sum(deltas) / len(deltas)


def calculate_acceleration(velocities: Sequence[float]) -> float:
    """Difference between the two newest velocity readings."""
    if len(velocities) < 2:
        return 0.0
    return velocities[0] - velocities[1]


# Levels


def get_pattern_level(z_score: float, count: int) -> PatternLevel:
    if z_score >= 2.5 or count >= 8:
        return "high"
    if z_score >= 1.5 or count >= 5:
        return "elevated"
    return "emerging"


def get_momentum_level(velocity: float, acceleration: float, delta: int) -> MomentumLevel:
    if velocity > 0.5 and acceleration > 0:
        return "surging"
    if velocity > 0.2 or acceleration > 0.1 or delta >= 4:
        return "rising"
    return "stable"


def get_cross_source_level(source_count: int) -> PatternLevel:
    if source_count >= 5:
        return "high"
    if source_count >= 4:
        return "elevated"
    return "emerging"


def get_compound_level(score: float) -> CompoundLevel:
    if score >= 30:
        return "critical"
    if score >= 20:
        return "high"
    return "elevated"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def detect_compound_patterns(
    topic_stats: Mapping[str, TopicStats],
    compound_patterns: Iterable[CompoundPattern],
) -> list[CompoundSignal]:
    """Fire each compound pattern whose active topic count reaches its minimum."""
    signals: list[CompoundSignal] = []

    for pattern in compound_patterns:
        active = [
            topic_id
            for topic_id in pattern.topics
            if topic_id in topic_stats
            and topic_stats[topic_id].count >= CorrelationEngine.COMPOUND_ACTIVE_THRESHOLD
        ]
        if len(active) < pattern.min_topics:
            continue

        base_score = sum(topic_stats[topic_id].weighted_count for topic_id in active)
        score = base_score * pattern.boost_factor
        signals.append(
            CompoundSignal(
                id=pattern.id,
                name=pattern.name,
                topics=list(pattern.topics),
                active_topics=active,
                score=score,
                prediction=pattern.prediction,
                level=get_compound_level(score),
                key_judgments=list(pattern.key_judgments),
                indicators=list(pattern.indicators),
                confirmation_signals=list(pattern.confirmation_signals),
                assumptions=list(pattern.assumptions),
                change_triggers=list(pattern.change_triggers),
            )
        )

    signals.sort(key=lambda s: s.score, reverse=True)
    return signals


class CorrelationEngine:
    """
    Analyzes patterns across news items to detect signals and trends.

    The rolling history is injected; engines sharing a history object share
    their z-score baseline and velocity series.
    """

    MOMENTUM_WINDOW_MINUTES = 10

    EMERGING_THRESHOLD = 3
    CROSS_SOURCE_THRESHOLD = 3
    PREDICTIVE_SCORE_THRESHOLD = 15
    COMPOUND_ACTIVE_THRESHOLD = 2

    def __init__(
        self,
        history: CorrelationHistory | None = None,
        topics: Sequence[CorrelationTopic] = CORRELATION_TOPICS,
        compound_patterns: Sequence[CompoundPattern] = COMPOUND_PATTERNS,
        clock: Callable[[], float] = time.time,
    ):
        self.history = history if history is not None else CorrelationHistory()
        self.topics = list(topics)
        self.compound_patterns = list(compound_patterns)
        self._clock = clock

    @staticmethod
    def _format_topic_name(topic_id: str) -> str:
        return topic_id.replace("-", " ").title()

    def _collect_stats(self, news_items: Iterable[NewsItem]) -> dict[str, TopicStats]:
        topic_stats: dict[str, TopicStats] = {}

        for item in news_items:
            title = item.title
            if not title:
                continue
            source = item.source or "Unknown"
            weight = get_source_weight(source)

            for topic in self.topics:
                if not topic.matches(title):
                    continue
                stats = topic_stats.setdefault(topic.id, TopicStats())
                stats.count += 1
                stats.weighted_count += weight
                stats.sources.add(source)
                if len(stats.headlines) < MAX_HEADLINES:
                    stats.headlines.append(
                        HeadlineRef(title=title, link=item.link or "", source=source)
                    )

        return topic_stats

    def analyze(
        self, news_items: Sequence[NewsItem | Mapping[str, Any]] | None
    ) -> CorrelationResults | None:
        """
        Analyze news items for patterns and signals.

        Args:
            news_items: NewsItem objects (or dicts with the same keys)

        Returns:
            CorrelationResults or None if no items
        """
        if not news_items:
            return None

        items = [i for i in (as_news_item(raw) for raw in news_items) if i is not None]

        now = self._clock()
        current_minute = int(now // 60)
        current_hour = int(now // 3600)

        topic_stats = self._collect_stats(items)
        topic_counts = {topic_id: s.count for topic_id, s in topic_stats.items()}

        with self.history.lock:
            persisted = self.history.update_hourly(topic_counts, current_hour)
            for topic_id, stats in topic_stats.items():
                stats.z_score = calculate_z_score(
                    stats.count, persisted.hourly_counts.get(topic_id, [])
                )

            self.history.record_minute(current_minute, topic_counts)
            minute_history = self.history.minute_counts()
            for topic_id, stats in topic_stats.items():
                stats.velocity = calculate_velocity(topic_id, minute_history)
                series = self.history.push_velocity(
                    topic_id, current_minute, stats.velocity
                )
                stats.acceleration = calculate_acceleration(series)

            old_counts = self.history.counts_at(
                current_minute - self.MOMENTUM_WINDOW_MINUTES
            )

        results = CorrelationResults(topic_stats=topic_stats)

        for topic in self.topics:
            stats = topic_stats.get(topic.id)
            if stats is None:
                continue

            name = self._format_topic_name(topic.id)
            count = stats.count
            sources = sorted(stats.sources)
            delta = count - old_counts.get(topic.id, 0)

            if count >= self.EMERGING_THRESHOLD:
                results.emerging_patterns.append(
                    EmergingPattern(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        count=count,
                        weighted_count=stats.weighted_count,
                        level=get_pattern_level(stats.z_score, count),
                        sources=sources,
                        headlines=stats.headlines,
                        z_score=stats.z_score,
                    )
                )

            if delta >= 2 or (count >= 3 and delta >= 1) or stats.velocity > 0.2:
                results.momentum_signals.append(
                    MomentumSignal(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        current=count,
                        delta=delta,
                        velocity=stats.velocity,
                        acceleration=stats.acceleration,
                        momentum=get_momentum_level(
                            stats.velocity, stats.acceleration, delta
                        ),
                        headlines=stats.headlines,
                    )
                )

            if len(sources) >= self.CROSS_SOURCE_THRESHOLD:
                results.cross_source_correlations.append(
                    CrossSourceCorrelation(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        source_count=len(sources),
                        sources=sources,
                        level=get_cross_source_level(len(sources)),
                        headlines=stats.headlines,
                    )
                )

            score = (
                stats.weighted_count * 2
                + len(sources) * 3
                + delta * 5
                + stats.z_score * 3
            )
            if score >= self.PREDICTIVE_SCORE_THRESHOLD:
                confidence = min(95, _round_half_up(score * 1.5))
                level: Literal["high", "medium", "low"] = (
                    "high" if confidence >= 70 else "medium" if confidence >= 50 else "low"
                )
                results.predictive_signals.append(
                    PredictiveSignal(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        score=score,
                        confidence=confidence,
                        prediction=select_prediction(topic, count).value,
                        level=level,
                        headlines=stats.headlines,
                    )
                )

        results.compound_signals = detect_compound_patterns(
            topic_stats, self.compound_patterns
        )

        results.emerging_patterns.sort(key=lambda x: x.weighted_count, reverse=True)
        results.momentum_signals.sort(key=lambda x: (x.velocity, x.delta), reverse=True)
        results.cross_source_correlations.sort(
            key=lambda x: x.source_count, reverse=True
        )
        results.predictive_signals.sort(key=lambda x: x.score, reverse=True)

        logger.info(
            f"Correlation: {len(results.emerging_patterns)} patterns, "
            f"{len(results.momentum_signals)} momentum, "
            f"{len(results.predictive_signals)} predictive, "
            f"{len(results.compound_signals)} compound"
        )
        return results

    def get_summary(self, results: CorrelationResults | None) -> CorrelationSummary:
        if results is None:
            return CorrelationSummary(total_signals=0, status="NO DATA")
        return CorrelationSummary(
            total_signals=results.total_signals,
            status=results.status,
            top_patterns=[p.name for p in results.emerging_patterns[:3]],
            top_momentum=[m.name for m in results.momentum_signals[:3]],
            top_compound=[c.name for c in results.compound_signals[:3]],
        )

    def clear_history(self) -> None:
        self.history.clear()

    def clear_persisted_history(self) -> None:
        self.history.clear_persisted()


_default_engine = CorrelationEngine()


def get_correlation_engine() -> CorrelationEngine:
    """Process-wide engine used by the module-level helpers."""
    return _default_engine


def analyze_correlations(
    news_items: Sequence[NewsItem | Mapping[str, Any]] | None,
) -> CorrelationResults | None:
    return _default_engine.analyze(news_items)


def get_correlation_summary(results: CorrelationResults | None) -> CorrelationSummary:
    return _default_engine.get_summary(results)


def clear_correlation_history() -> None:
    """Reset minute buckets and velocity series of the default engine."""
    _default_engine.clear_history()


def clear_persisted_history() -> None:
    """Drop the hourly baseline of the default engine."""
    _default_engine.clear_persisted_history()
