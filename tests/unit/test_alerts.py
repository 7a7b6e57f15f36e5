"""Unit tests for monitor.alerts.engine.

Covers:
- news_alert popups fire once per new alert item
- econ_swing: threshold per group, fires once, re-arms after the move fades
- Correlation and narrative categories diffed by id
- reset() and panel -> tab routing
"""

from __future__ import annotations

import pytest

from monitor.alerts.engine import AlertEngine, tab_for_panel
from monitor.analysis.correlation import CorrelationEngine
from monitor.analysis.history import CorrelationHistory, NarrativeHistory
from monitor.analysis.narrative import NarrativeTracker
from monitor.analysis.types import CorrelationResults, EmergingPattern, NarrativeResults
from monitor.datasource.markets.aggregate import MarketSnapshot
from monitor.datasource.markets.finnhub import MarketItem


@pytest.fixture
def alert_engine(clock) -> AlertEngine:
    return AlertEngine(
        CorrelationEngine(history=CorrelationHistory(), clock=clock),
        NarrativeTracker(history=NarrativeHistory(), clock=clock),
        clock=clock,
    )


def _markets(index_move: float | None, commodity_move: float | None = None) -> MarketSnapshot:
    return MarketSnapshot(
        indices=[
            MarketItem(
                symbol="^GSPC", name="S&P 500", price=500.0, change_percent=index_move, type="index"
            )
        ],
        commodities=[
            MarketItem(
                symbol="CL=F",
                name="Crude Oil",
                price=80.0,
                change_percent=commodity_move,
                type="commodity",
            )
        ],
    )


def _pattern(topic_id: str) -> EmergingPattern:
    return EmergingPattern(
        id=topic_id,
        name=topic_id.title(),
        category="Conflict",
        count=3,
        weighted_count=3.0,
        level="emerging",
        sources=["A", "B", "C"],
    )


def _types(popups) -> list[str]:
    return [p.type for p in popups]


class TestNewsAlerts:
    def test_fires_once_per_item(self, alert_engine, make_news):
        item = make_news("Missile strike reported", is_alert=True, category="politics")

        first = alert_engine.detect([item])
        second = alert_engine.detect([item])

        popup = next(p for p in first if p.type == "news_alert")
        assert popup.severity == "danger"
        assert popup.detail == "Missile strike reported"
        assert popup.count == 1
        assert popup.panel_id == "politics"
        assert popup.tab_id == "global"
        assert "news_alert" not in _types(second)

    def test_counts_new_items(self, alert_engine, make_news):
        old = make_news("Troops mass at border", is_alert=True)
        alert_engine.detect([old])
        new = [make_news("Ceasefire collapses", is_alert=True), make_news("Coup attempt", is_alert=True)]

        popups = alert_engine.detect([old, *new])

        assert next(p for p in popups if p.type == "news_alert").count == 2

    def test_panel_override(self, alert_engine, make_news):
        item = make_news("Nuclear test detected", is_alert=True)
        popups = alert_engine.detect([item], panel_for_news=lambda i: "intel")
        assert next(p for p in popups if p.type == "news_alert").panel_id == "intel"


class TestEconSwings:
    def test_index_threshold(self, alert_engine):
        assert "econ_swing" not in _types(alert_engine.detect([], _markets(1.4)))
        popups = alert_engine.detect([], _markets(-1.5))

        swing = next(p for p in popups if p.type == "econ_swing")
        assert swing.severity == "warning"
        assert swing.detail == "S&P 500"
        assert swing.panel_id == "markets"
        assert swing.tab_id == "economy"

    def test_commodity_threshold_is_wider(self, alert_engine):
        assert "econ_swing" not in _types(alert_engine.detect([], _markets(0.0, 2.9)))
        assert "econ_swing" in _types(alert_engine.detect([], _markets(0.0, 3.0)))

    def test_fires_once_then_rearms(self, alert_engine):
        """A swing that persists alerts once; after it fades it can alert again."""
        assert "econ_swing" in _types(alert_engine.detect([], _markets(2.0)))
        assert "econ_swing" not in _types(alert_engine.detect([], _markets(2.5)))
        assert "econ_swing" not in _types(alert_engine.detect([], _markets(0.3)))
        assert "econ_swing" in _types(alert_engine.detect([], _markets(-2.0)))

    def test_missing_change_ignored(self, alert_engine):
        assert alert_engine.detect([], _markets(None, None)) == []


class TestSignalDiffs:
    def test_precomputed_results_diffed_by_id(self, alert_engine):
        first = CorrelationResults(emerging_patterns=[_pattern("russia-ukraine")])
        second = CorrelationResults(
            emerging_patterns=[_pattern("russia-ukraine"), _pattern("iran")]
        )
        empty_narratives = NarrativeResults()

        popups = alert_engine.detect([], correlation=first, narratives=empty_narratives)
        emerging = next(p for p in popups if p.type == "emerging")
        assert emerging.count == 1
        assert emerging.severity == "warning"
        assert emerging.tab_id == "social"

        popups = alert_engine.detect([], correlation=second, narratives=empty_narratives)
        emerging = next(p for p in popups if p.type == "emerging")
        assert emerging.count == 1
        assert emerging.detail == "Iran"

    def test_reappearing_signal_alerts_again(self, alert_engine):
        present = CorrelationResults(emerging_patterns=[_pattern("iran")])
        absent = CorrelationResults()
        narratives = NarrativeResults()

        alert_engine.detect([], correlation=present, narratives=narratives)
        alert_engine.detect([], correlation=absent, narratives=narratives)
        popups = alert_engine.detect([], correlation=present, narratives=narratives)

        assert "emerging" in _types(popups)

    def test_runs_engines_when_not_given(self, alert_engine, ukraine_items):
        popups = alert_engine.detect(ukraine_items)
        types = _types(popups)
        assert "emerging" in types
        assert "momentum" in types
        assert "predictive" in types

    def test_reset(self, alert_engine, make_news):
        item = make_news("Missile strike reported", is_alert=True)
        alert_engine.detect([item], _markets(2.0))

        alert_engine.reset()
        types = _types(alert_engine.detect([item], _markets(2.0)))

        assert "news_alert" in types
        assert "econ_swing" in types


class TestTabRouting:
    def test_known_and_unknown_panels(self):
        assert tab_for_panel("crypto") == "economy"
        assert tab_for_panel("brazil") == "regional"
        assert tab_for_panel("ai") == "technology"
        assert tab_for_panel("politics") == "global"
        assert tab_for_panel(None) is None
