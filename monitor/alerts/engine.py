"""
Alert engine - turns newly appearing signals into popups.

Each call compares the ids of every result category with the previous call
and emits one popup per category that gained ids. Result ids are the static
topic, pattern, and narrative ids, so a signal that persists across calls
alerts only once; one that disappears and comes back alerts again.
"""

import time
import uuid
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel

from monitor.analysis.correlation import CorrelationEngine, get_correlation_engine
from monitor.analysis.narrative import NarrativeTracker, get_narrative_tracker
from monitor.analysis.types import (
    CorrelationResults,
    NarrativeResults,
    NewsItem,
    as_news_item,
)
from monitor.datasource.markets.aggregate import MarketSnapshot

AlertType = Literal[
    "news_alert",
    "econ_swing",
    "compound",
    "emerging",
    "momentum",
    "predictive",
    "narrative_tracker",
    "narrative_watch",
]
AlertSeverity = Literal["danger", "warning", "info"]
TabId = Literal["global", "regional", "economy", "social", "technology"]

# Absolute % change that counts as a swing
ECON_THRESHOLDS = {"indices": 1.5, "commodities": 3.0}

_PANEL_TABS: dict[str, TabId] = {
    "markets": "economy",
    "commodities": "economy",
    "crypto": "economy",
    "finance": "economy",
    "correlation": "social",
    "narrative": "social",
    "brazil": "regional",
    "latam": "regional",
    "tech": "technology",
    "ai": "technology",
}


class AlertPopup(BaseModel):
    id: str
    type: AlertType
    title_key: str
    detail: str | None = None
    count: int
    timestamp: int
    severity: AlertSeverity
    panel_id: str | None = None
    tab_id: TabId | None = None


def tab_for_panel(panel_id: str | None) -> TabId | None:
    if not panel_id:
        return None
    return _PANEL_TABS.get(panel_id, "global")


class AlertEngine:
    """
    Stateful diff over consecutive snapshots.

    Usage:
        alerts = AlertEngine()
        for popup in alerts.detect(news_items, markets):
            ...
    """

    CATEGORIES = (
        "news_alert",
        "compound",
        "emerging",
        "momentum",
        "predictive",
        "narrative_tracker",
        "narrative_watch",
    )

    def __init__(
        self,
        correlation_engine: CorrelationEngine | None = None,
        narrative_tracker: NarrativeTracker | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.correlation_engine = correlation_engine or get_correlation_engine()
        self.narrative_tracker = narrative_tracker or get_narrative_tracker()
        self._clock = clock
        self._previous: dict[str, set[str]] = {c: set() for c in self.CATEGORIES}
        self._active_swings: set[str] = set()

    def reset(self) -> None:
        for ids in self._previous.values():
            ids.clear()
        self._active_swings.clear()

    def _new_ids(self, category: str, current: Iterable[str]) -> list[str]:
        current = list(current)
        previous = self._previous[category]
        fresh = [i for i in current if i not in previous]
        self._previous[category] = set(current)
        return fresh

    def _popup(
        self,
        alert_type: AlertType,
        count: int,
        detail: str | None,
        severity: AlertSeverity,
        panel_id: str | None = None,
    ) -> AlertPopup:
        now_ms = int(self._clock() * 1000)
        return AlertPopup(
            id=f"{alert_type}-{now_ms}-{uuid.uuid4().hex[:6]}",
            type=alert_type,
            title_key=f"alerts.title.{alert_type}",
            detail=detail,
            count=count,
            timestamp=now_ms,
            severity=severity,
            panel_id=panel_id,
            tab_id=tab_for_panel(panel_id),
        )

    def _diff_signals(
        self,
        popups: list[AlertPopup],
        category: str,
        signals: Sequence[Any],
        severity: AlertSeverity,
        panel_id: str,
        detail: Callable[[Any], str | None] = lambda s: s.name,
    ) -> None:
        fresh = self._new_ids(category, (s.id for s in signals))
        if not fresh:
            return
        example = next(s for s in signals if s.id in fresh)
        popups.append(self._popup(category, len(fresh), detail(example), severity, panel_id))

    def _detect_swings(self, markets: MarketSnapshot) -> AlertPopup | None:
        new_swings = []
        groups = (("indices", markets.indices), ("commodities", markets.commodities))
        for group, items in groups:
            threshold = ECON_THRESHOLDS[group]
            for item in items:
                change = item.change_percent
                if change is not None and abs(change) >= threshold:
                    if item.symbol not in self._active_swings:
                        self._active_swings.add(item.symbol)
                        new_swings.append(item)
                else:
                    self._active_swings.discard(item.symbol)

        if not new_swings:
            return None
        example = new_swings[0]
        return self._popup(
            "econ_swing", len(new_swings), example.name or example.symbol, "warning", "markets"
        )

    def detect(
        self,
        news_items: Sequence[NewsItem | Mapping[str, Any]],
        markets: MarketSnapshot | None = None,
        correlation: CorrelationResults | None = None,
        narratives: NarrativeResults | None = None,
        panel_for_news: Callable[[NewsItem], str | None] | None = None,
    ) -> list[AlertPopup]:
        """
        Popups for everything new since the previous call.

        ``correlation`` and ``narratives`` may be passed in when the caller
        already ran the engines on this batch; otherwise they run here.
        """
        items = [i for i in (as_news_item(raw) for raw in news_items) if i is not None]
        popups: list[AlertPopup] = []

        alert_items = [i for i in items if i.is_alert]
        fresh = self._new_ids("news_alert", (i.id for i in alert_items))
        if fresh:
            example = next(i for i in alert_items if i.id in fresh)
            panel_id = panel_for_news(example) if panel_for_news else example.category or None
            popups.append(self._popup("news_alert", len(fresh), example.title, "danger", panel_id))

        if markets is not None:
            swing = self._detect_swings(markets)
            if swing is not None:
                popups.append(swing)

        if correlation is None:
            correlation = self.correlation_engine.analyze(items)
        if correlation is not None:
            self._diff_signals(popups, "compound", correlation.compound_signals, "danger", "correlation")
            self._diff_signals(popups, "emerging", correlation.emerging_patterns, "warning", "correlation")
            self._diff_signals(popups, "momentum", correlation.momentum_signals, "warning", "correlation")
            self._diff_signals(
                popups,
                "predictive",
                correlation.predictive_signals,
                "info",
                "correlation",
                detail=lambda s: s.prediction or s.name,
            )

        if narratives is None:
            narratives = self.narrative_tracker.analyze(items)
        if narratives is not None:
            tracked = [
                *narratives.trending_narratives,
                *narratives.emerging_fringe,
                *narratives.fringe_to_mainstream,
                *narratives.disinfo_signals,
            ]
            self._diff_signals(popups, "narrative_tracker", tracked, "info", "narrative")
            self._diff_signals(
                popups, "narrative_watch", narratives.narrative_watch, "info", "narrative"
            )

        if popups:
            logger.info(
                "Alerts: " + ", ".join(f"{p.type} x{p.count}" for p in popups)
            )
        return popups
