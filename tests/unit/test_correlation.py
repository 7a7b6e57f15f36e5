"""Unit tests for monitor.analysis.correlation.

Covers:
- Statistics helpers: z-score, velocity, acceleration
- Level classification for patterns, momentum, cross-source and compound signals
- CorrelationEngine.analyze: emerging, momentum, cross-source, predictive and compound output
- Hourly z-score baseline and minute velocity built up over several runs
- Source weighting and history reset behaviour
- Completeness of the compound pattern table
"""

from __future__ import annotations

import pytest

from monitor.analysis.compound_patterns import COMPOUND_PATTERNS, CompoundPattern
from monitor.analysis.config import get_topic_by_id
from monitor.analysis.correlation import (
    CorrelationEngine,
    Prediction,
    analyze_correlations,
    calculate_acceleration,
    calculate_velocity,
    calculate_z_score,
    clear_correlation_history,
    clear_persisted_history,
    get_compound_level,
    get_cross_source_level,
    get_momentum_level,
    get_pattern_level,
    select_prediction,
)
from monitor.analysis.history import CorrelationHistory

_LEVEL_RANK = {"emerging": 0, "elevated": 1, "high": 2}


def _pattern(topics: tuple[str, ...], min_topics: int, boost: float) -> CompoundPattern:
    text = ("first", "second", "third")
    return CompoundPattern(
        id="test-combo",
        topics=topics,
        min_topics=min_topics,
        boost_factor=boost,
        name="Test Combo",
        prediction="Something happens",
        key_judgments=text,
        indicators=text,
        confirmation_signals=text,
        assumptions=text,
        change_triggers=text,
    )


def _tariff_and_fed_items(make_news):
    return [
        make_news("Tariff threat grows"),
        make_news("New tariff list published"),
        make_news("Tariff deal collapses"),
        make_news("Powell signals patience"),
        make_news("FOMC minutes released"),
        make_news("Rate hike odds climb"),
    ]


def _emerging(results, topic_id):
    return next(p for p in results.emerging_patterns if p.id == topic_id)


# ── Statistics ───────────────────────────────────────────────────────────────────

class TestZScore:
    def test_thin_history_is_zero(self):
        """Fewer than three history values must give a z-score of 0."""
        assert calculate_z_score(10, []) == 0.0
        assert calculate_z_score(10, [1, 2]) == 0.0

    def test_flat_history_is_zero(self):
        """Zero standard deviation must give 0 rather than dividing by zero."""
        assert calculate_z_score(10, [2, 2, 2, 2]) == 0.0

    def test_population_standard_deviation(self):
        """Mean 2 and population std sqrt(2/3) put 4 at about 2.449."""
        assert calculate_z_score(4, [1, 2, 3]) == pytest.approx(2.4495, abs=1e-4)

    def test_below_mean_is_negative(self):
        assert calculate_z_score(0, [1, 2, 3]) < 0


class TestVelocity:
    def test_single_bucket_is_zero(self):
        assert calculate_velocity("t", {100: {"t": 5}}) == 0.0

    def test_per_minute_rate(self):
        """A jump of 2 over one minute is a velocity of 2.0."""
        assert calculate_velocity("t", {100: {"t": 1}, 101: {"t": 3}}) == pytest.approx(2.0)

    def test_gap_between_buckets_divides_by_minutes(self):
        assert calculate_velocity("t", {100: {"t": 0}, 104: {"t": 4}}) == pytest.approx(1.0)

    def test_missing_topic_counts_as_zero(self):
        assert calculate_velocity("t", {100: {}, 101: {"t": 2}}) == pytest.approx(2.0)

    def test_only_recent_buckets_used(self):
        """Buckets beyond the five newest must not affect the result."""
        history = {m: {"t": 1} for m in range(100, 105)}
        history[50] = {"t": 100}
        assert calculate_velocity("t", history) == 0.0

    def test_acceleration(self):
        assert calculate_acceleration([]) == 0.0
        assert calculate_acceleration([0.5]) == 0.0
        assert calculate_acceleration([0.5, 0.2]) == pytest.approx(0.3)


# ── Levels ───────────────────────────────────────────────────────────────────────

class TestLevels:
    @pytest.mark.parametrize("count", [0, 3, 5, 8, 12])
    def test_pattern_level_monotonic_in_z(self, count):
        """Raising the z-score at a fixed count must never lower the level."""
        ranks = [
            _LEVEL_RANK[get_pattern_level(z, count)] for z in (-1.0, 0.0, 1.5, 2.0, 2.5, 4.0)
        ]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize("z", [-1.0, 0.0, 1.6, 3.0])
    def test_pattern_level_monotonic_in_count(self, z):
        ranks = [_LEVEL_RANK[get_pattern_level(z, c)] for c in range(0, 12)]
        assert ranks == sorted(ranks)

    def test_pattern_level_thresholds(self):
        assert get_pattern_level(0.0, 3) == "emerging"
        assert get_pattern_level(0.0, 5) == "elevated"
        assert get_pattern_level(1.5, 3) == "elevated"
        assert get_pattern_level(0.0, 8) == "high"
        assert get_pattern_level(2.5, 3) == "high"

    def test_momentum_level(self):
        assert get_momentum_level(0.6, 0.1, 0) == "surging"
        assert get_momentum_level(0.6, 0.0, 0) == "rising"
        assert get_momentum_level(0.0, 0.0, 4) == "rising"
        assert get_momentum_level(0.0, 0.0, 1) == "stable"

    def test_cross_source_level(self):
        assert get_cross_source_level(3) == "emerging"
        assert get_cross_source_level(4) == "elevated"
        assert get_cross_source_level(5) == "high"

    def test_compound_level(self):
        assert get_compound_level(12.0) == "elevated"
        assert get_compound_level(20.0) == "high"
        assert get_compound_level(30.0) == "critical"


class TestSelectPrediction:
    def test_tariffs_needs_four_mentions_for_volatility(self):
        tariffs = get_topic_by_id("tariffs")
        assert select_prediction(tariffs, 4) is Prediction.MARKET_VOLATILITY
        assert select_prediction(tariffs, 3) is Prediction.MAINSTREAM_TRACTION

    def test_geopolitical_topics(self):
        assert (
            select_prediction(get_topic_by_id("russia-ukraine"), 3)
            is Prediction.GEOPOLITICAL_ESCALATION
        )

    def test_fed_rates(self):
        assert select_prediction(get_topic_by_id("fed-rates"), 1) is Prediction.FINANCIAL_COVERAGE


# ── Engine ───────────────────────────────────────────────────────────────────────

class TestAnalyze:
    def test_empty_input_returns_none(self, correlation_engine):
        """No items means no results object at all."""
        assert correlation_engine.analyze([]) is None
        assert correlation_engine.analyze(None) is None

    def test_ukraine_example_is_emerging(self, correlation_engine, ukraine_items):
        """Three Ukraine headlines from three sources form an emerging pattern."""
        results = correlation_engine.analyze(ukraine_items)

        pattern = _emerging(results, "russia-ukraine")
        assert pattern.count >= 3
        assert pattern.level == "emerging"
        assert pattern.name == "Russia Ukraine"
        assert pattern.category == "Conflict"
        assert len(pattern.headlines) == 3

    def test_ten_sources_is_high(self, correlation_engine, make_news):
        """Ten matching items from ten distinct sources must classify as high."""
        items = [
            make_news(f"Ukraine frontline report {i}", source=f"Regional Desk {i}")
            for i in range(10)
        ]
        results = correlation_engine.analyze(items)

        pattern = _emerging(results, "russia-ukraine")
        assert pattern.count == 10
        assert pattern.level == "high"

    def test_high_tier_sources_outweigh_low_tier(self, clock, make_news):
        """Reuters/AP/BBC must carry more weighted count than fringe outlets."""
        titles = ["Tariff threat grows", "New tariff list published", "Tariff deal collapses"]
        high = CorrelationEngine(history=CorrelationHistory(), clock=clock).analyze(
            [make_news(t, source=s) for t, s in zip(titles, ["Reuters", "AP", "BBC"])]
        )
        low = CorrelationEngine(history=CorrelationHistory(), clock=clock).analyze(
            [
                make_news(t, source=s)
                for t, s in zip(titles, ["ZeroHedge", "Infowars", "NaturalNews"])
            ]
        )

        high_weight = _emerging(high, "tariffs").weighted_count
        low_weight = _emerging(low, "tariffs").weighted_count
        assert high_weight > low_weight
        assert high_weight == pytest.approx(4.2)
        assert low_weight == pytest.approx(1.2)

    def test_matching_uses_title_only(self, correlation_engine, make_news):
        items = [
            make_news("Local council meets", description="Talks on Ukraine aid")
            for _ in range(3)
        ]
        results = correlation_engine.analyze(items)
        assert "russia-ukraine" not in results.topic_stats

    def test_headline_samples_capped_at_five(self, correlation_engine, make_news):
        items = [make_news(f"Ukraine briefing {i}") for i in range(7)]
        results = correlation_engine.analyze(items)
        headlines = _emerging(results, "russia-ukraine").headlines
        assert [h.title for h in headlines] == [f"Ukraine briefing {i}" for i in range(5)]

    def test_accepts_plain_dicts(self, correlation_engine):
        items = [
            {"title": "Ukraine announces new policy", "source": "Reuters"},
            {"title": "Ukraine military update", "source": "BBC"},
            {"title": "Zelensky addresses nation", "source": "CNN"},
        ]
        results = correlation_engine.analyze(items)
        assert _emerging(results, "russia-ukraine").count == 3

    def test_first_run_has_momentum(self, correlation_engine, ukraine_items):
        """With no earlier minute bucket the whole count is the delta."""
        results = correlation_engine.analyze(ukraine_items)

        signal = next(m for m in results.momentum_signals if m.id == "russia-ukraine")
        assert signal.current == 3
        assert signal.delta == 3
        assert signal.velocity == 0.0

    def test_cross_source(self, correlation_engine, ukraine_items):
        results = correlation_engine.analyze(ukraine_items)

        corr = next(c for c in results.cross_source_correlations if c.id == "russia-ukraine")
        assert corr.source_count == 3
        assert corr.sources == ["BBC World", "CNN", "Reuters"]
        assert corr.level == "emerging"

    def test_predictive_score_and_confidence(self, correlation_engine, ukraine_items):
        """weighted 3.9 * 2 + 3 sources * 3 + delta 3 * 5 + z 0 = 31.8."""
        results = correlation_engine.analyze(ukraine_items)

        signal = next(p for p in results.predictive_signals if p.id == "russia-ukraine")
        assert signal.score == pytest.approx(31.8)
        assert signal.confidence == 48
        assert signal.level == "low"
        assert signal.prediction == Prediction.GEOPOLITICAL_ESCALATION.value

    def test_emerging_sorted_by_weighted_count(self, correlation_engine, make_news):
        items = [
            *(make_news(f"Ukraine item {i}", source="Reuters") for i in range(3)),
            *(make_news(f"Tariff item {i}", source="ZeroHedge") for i in range(4)),
        ]
        results = correlation_engine.analyze(items)
        weights = [p.weighted_count for p in results.emerging_patterns]
        assert weights == sorted(weights, reverse=True)
        assert results.emerging_patterns[0].id == "russia-ukraine"


# ── Rolling history across runs ──────────────────────────────────────────────────

def _ukraine(make_news, n):
    return [make_news(f"Ukraine update {i}") for i in range(n)]


def _run_hourly(engine, clock, make_news, counts):
    results = None
    for n in counts:
        results = engine.analyze(_ukraine(make_news, n))
        clock.advance(3600)
    return results


class TestHourlyBaseline:
    def test_spike_over_quiet_hours_is_elevated(self, correlation_engine, clock, make_news):
        """Hours [1, 1, 1, 1] then 4: mean 1.6, std 1.2, z = 2.0."""
        results = _run_hourly(correlation_engine, clock, make_news, [1, 1, 1, 1, 4])

        pattern = _emerging(results, "russia-ukraine")
        assert pattern.z_score == pytest.approx(2.0)
        assert pattern.level == "elevated"

    def test_same_count_without_history_is_emerging(self, correlation_engine, make_news):
        results = correlation_engine.analyze(_ukraine(make_news, 4))
        assert _emerging(results, "russia-ukraine").level == "emerging"

    def test_larger_spike_is_high(self, correlation_engine, clock, make_news):
        """Eight quiet hours then 4: z = 2 * sqrt(2)."""
        results = _run_hourly(correlation_engine, clock, make_news, [1] * 8 + [4])

        pattern = _emerging(results, "russia-ukraine")
        assert pattern.z_score == pytest.approx(2.8284, abs=1e-4)
        assert pattern.level == "high"

    def test_z_score_raises_predictive_score(self, correlation_engine, clock, make_news):
        baseline = CorrelationEngine(history=CorrelationHistory(), clock=clock).analyze(
            _ukraine(make_news, 4)
        )
        results = _run_hourly(correlation_engine, clock, make_news, [1, 1, 1, 1, 4])

        base_score = next(p for p in baseline.predictive_signals if p.id == "russia-ukraine")
        signal = next(p for p in results.predictive_signals if p.id == "russia-ukraine")
        assert signal.score == pytest.approx(base_score.score + 3 * 2.0)


class TestMinuteMomentum:
    def _run(self, engine, clock, make_news, counts):
        results = None
        for n in counts:
            results = engine.analyze(_ukraine(make_news, n))
            clock.advance(60)
        return next(m for m in results.momentum_signals if m.id == "russia-ukraine")

    def test_accelerating_topic_surges(self, correlation_engine, clock, make_news):
        """Counts 1, 2, 4 a minute apart: velocity (2 + 1) / 2, acceleration 1.5 - 1.0."""
        signal = self._run(correlation_engine, clock, make_news, [1, 2, 4])

        assert signal.velocity == pytest.approx(1.5)
        assert signal.acceleration == pytest.approx(0.5)
        assert signal.delta == 4
        assert signal.momentum == "surging"

    def test_decelerating_topic_is_rising(self, correlation_engine, clock, make_news):
        """Counts 1, 3, 4: velocity still 1.5 but down from 2.0."""
        signal = self._run(correlation_engine, clock, make_news, [1, 3, 4])

        assert signal.velocity == pytest.approx(1.5)
        assert signal.acceleration == pytest.approx(-0.5)
        assert signal.momentum == "rising"

    def test_sorted_by_velocity_before_delta(self, correlation_engine, clock, make_news):
        def batch(ukraine):
            return [
                *(make_news(f"Tariff schedule {i}") for i in range(5)),
                *(make_news(f"Federal Reserve holds {i}") for i in range(2)),
                *_ukraine(make_news, ukraine),
            ]

        correlation_engine.analyze(batch(1))
        clock.advance(60)
        results = correlation_engine.analyze(batch(3))

        tracked = {"russia-ukraine", "tariffs", "fed-rates"}
        signals = [m for m in results.momentum_signals if m.id in tracked]
        assert [m.id for m in signals] == ["russia-ukraine", "tariffs", "fed-rates"]
        assert [(m.velocity, m.delta) for m in signals] == [(2.0, 3), (0.0, 5), (0.0, 2)]


class TestCompoundSignals:
    def test_compound_score_is_boosted_weighted_sum(self, clock, make_news):
        """Two active topics with weighted counts 3 + 3 and boost 2.0 score 12.0."""
        engine = CorrelationEngine(
            history=CorrelationHistory(),
            compound_patterns=[_pattern(("tariffs", "fed-rates"), 2, 2.0)],
            clock=clock,
        )
        results = engine.analyze(_tariff_and_fed_items(make_news))

        assert len(results.compound_signals) == 1
        signal = results.compound_signals[0]
        assert signal.score == pytest.approx(12.0)
        assert signal.level == "elevated"
        assert signal.active_topics == ["tariffs", "fed-rates"]

    def test_min_topics_not_reached(self, clock, make_news):
        """A pattern needing three active topics must not fire on two."""
        engine = CorrelationEngine(
            history=CorrelationHistory(),
            compound_patterns=[_pattern(("tariffs", "fed-rates", "layoffs"), 3, 2.0)],
            clock=clock,
        )
        results = engine.analyze(_tariff_and_fed_items(make_news))
        assert results.compound_signals == []

    def test_single_mention_is_not_active(self, clock, make_news):
        engine = CorrelationEngine(
            history=CorrelationHistory(),
            compound_patterns=[_pattern(("tariffs", "fed-rates"), 2, 2.0)],
            clock=clock,
        )
        items = [
            make_news("Tariff threat grows"),
            make_news("Tariff deal collapses"),
            make_news("Powell signals patience"),
        ]
        assert engine.analyze(items).compound_signals == []

    def test_pattern_table_is_complete(self):
        """Every narrative array of every compound pattern has three non-empty entries."""
        assert COMPOUND_PATTERNS
        for pattern in COMPOUND_PATTERNS:
            for field_name in (
                "key_judgments",
                "indicators",
                "confirmation_signals",
                "assumptions",
                "change_triggers",
            ):
                entries = getattr(pattern, field_name)
                assert len(entries) == 3, f"{pattern.id}.{field_name}"
                assert all(isinstance(e, str) and e.strip() for e in entries), (
                    f"{pattern.id}.{field_name}"
                )
            assert len(pattern.topics) >= 2
            assert 1 <= pattern.min_topics <= len(pattern.topics)

    def test_pattern_topics_exist(self):
        for pattern in COMPOUND_PATTERNS:
            for topic_id in pattern.topics:
                assert get_topic_by_id(topic_id) is not None, f"{pattern.id}: {topic_id}"


class TestHistoryReset:
    def test_cleared_engine_behaves_like_first_run(self, correlation_engine, clock, ukraine_items):
        """After both resets a later run must equal the very first run."""
        first = correlation_engine.analyze(ukraine_items)

        clock.advance(600)
        second = correlation_engine.analyze(ukraine_items)
        assert not any(m.id == "russia-ukraine" for m in second.momentum_signals)

        correlation_engine.clear_history()
        correlation_engine.clear_persisted_history()
        third = correlation_engine.analyze(ukraine_items)

        assert third.model_dump() == first.model_dump()

    def test_repeat_in_same_minute_is_stable(self, correlation_engine, ukraine_items):
        first = correlation_engine.analyze(ukraine_items)
        second = correlation_engine.analyze(ukraine_items)
        assert second.model_dump() == first.model_dump()

    def test_module_level_helpers_reset_default_engine(self, ukraine_items):
        clear_correlation_history()
        clear_persisted_history()
        first = analyze_correlations(ukraine_items)

        clear_correlation_history()
        clear_persisted_history()
        again = analyze_correlations(ukraine_items)

        assert [p.id for p in again.emerging_patterns] == [p.id for p in first.emerging_patterns]
        assert [m.delta for m in again.momentum_signals] == [
            m.delta for m in first.momentum_signals
        ]
        clear_correlation_history()
        clear_persisted_history()


class TestSummary:
    def test_no_data(self, correlation_engine):
        summary = correlation_engine.get_summary(None)
        assert summary.status == "NO DATA"
        assert summary.total_signals == 0

    def test_counts_signals(self, correlation_engine, ukraine_items):
        results = correlation_engine.analyze(ukraine_items)
        summary = correlation_engine.get_summary(results)

        assert summary.total_signals == results.total_signals
        assert summary.status == f"{results.total_signals} SIGNALS"
        assert "Russia Ukraine" in summary.top_patterns
