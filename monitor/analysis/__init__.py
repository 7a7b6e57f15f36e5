"""
Signal detection over news items: topic correlation and narrative tracking.
"""

from monitor.analysis.types import (
    CompoundSignal,
    CorrelationResults,
    CorrelationSummary,
    CrossSourceCorrelation,
    EmergingPattern,
    HeadlineRef,
    MomentumSignal,
    NarrativeResults,
    NarrativeSummary,
    NewsItem,
    PredictiveSignal,
    TopicStats,
)
from monitor.analysis.history import (
    CorrelationHistory,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    NarrativeHistory,
)
from monitor.analysis.correlation import (
    CorrelationEngine,
    analyze_correlations,
    clear_correlation_history,
    clear_persisted_history,
    get_correlation_summary,
)
from monitor.analysis.narrative import (
    NarrativeTracker,
    analyze_narratives,
    clear_narrative_history,
    get_narrative_summary,
)
from monitor.analysis.config import (
    CORRELATION_TOPICS,
    SourceType,
    classify_source,
    get_source_weight,
)
from monitor.analysis.compound_patterns import COMPOUND_PATTERNS, CompoundPattern

__all__ = [
    # Types
    "CompoundSignal",
    "CorrelationResults",
    "CorrelationSummary",
    "CrossSourceCorrelation",
    "EmergingPattern",
    "HeadlineRef",
    "MomentumSignal",
    "NarrativeResults",
    "NarrativeSummary",
    "NewsItem",
    "PredictiveSignal",
    "TopicStats",
    # History
    "CorrelationHistory",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "NarrativeHistory",
    # Engines
    "CorrelationEngine",
    "analyze_correlations",
    "clear_correlation_history",
    "clear_persisted_history",
    "get_correlation_summary",
    "NarrativeTracker",
    "analyze_narratives",
    "clear_narrative_history",
    "get_narrative_summary",
    # Config
    "CORRELATION_TOPICS",
    "COMPOUND_PATTERNS",
    "CompoundPattern",
    "SourceType",
    "classify_source",
    "get_source_weight",
]
