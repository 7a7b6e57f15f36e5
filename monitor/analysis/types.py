"""
Analysis input and result types using Pydantic models.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

PatternLevel = Literal["high", "elevated", "emerging"]
MomentumLevel = Literal["surging", "rising", "stable"]
CompoundLevel = Literal["critical", "high", "elevated"]


class NewsItem(BaseModel):
    """A parsed news item. Immutable once built; timestamp is epoch millis."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    description: str | None = None
    link: str = ""
    source: str = ""
    category: str = ""
    timestamp: int = 0
    pub_date: str | None = None
    is_alert: bool = False
    alert_keyword: str | None = None
    region: str | None = None
    topics: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Title and description joined, so a match can span both."""
        return f"{self.title or ''} {self.description or ''}"


class HeadlineRef(BaseModel):
    """Reference to a news headline."""

    title: str
    link: str
    source: str


class TopicStats(BaseModel):
    """Per-topic statistics for one analysis run."""

    count: int = 0
    weighted_count: float = 0.0
    sources: set[str] = Field(default_factory=set)
    headlines: list[HeadlineRef] = Field(default_factory=list)
    velocity: float = 0.0
    acceleration: float = 0.0
    z_score: float = 0.0


class EmergingPattern(BaseModel):
    """Detected emerging pattern across news items."""

    id: str
    name: str
    category: str
    count: int
    weighted_count: float
    level: PatternLevel
    sources: list[str]
    headlines: list[HeadlineRef] = Field(default_factory=list)
    z_score: float = 0.0


class MomentumSignal(BaseModel):
    """Topic momentum signal (rising trends)."""

    id: str
    name: str
    category: str
    current: int
    delta: int
    velocity: float
    acceleration: float
    momentum: MomentumLevel
    headlines: list[HeadlineRef] = Field(default_factory=list)


class CrossSourceCorrelation(BaseModel):
    """Cross-source correlation (same topic across multiple sources)."""

    id: str
    name: str
    category: str
    source_count: int
    sources: list[str]
    level: PatternLevel
    headlines: list[HeadlineRef] = Field(default_factory=list)


class PredictiveSignal(BaseModel):
    """Predictive signal based on combined metrics."""

    id: str
    name: str
    category: str
    score: float
    confidence: int
    prediction: str
    level: Literal["high", "medium", "low"]
    headlines: list[HeadlineRef] = Field(default_factory=list)


class CompoundSignal(BaseModel):
    """Several related topics active at once."""

    id: str
    name: str
    topics: list[str]
    active_topics: list[str]
    score: float
    prediction: str
    level: CompoundLevel
    key_judgments: list[str] = Field(default_factory=list)
    indicators: list[str] = Field(default_factory=list)
    confirmation_signals: list[str] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    change_triggers: list[str] = Field(default_factory=list)


class CorrelationResults(BaseModel):
    """Complete correlation analysis results."""

    emerging_patterns: list[EmergingPattern] = Field(default_factory=list)
    momentum_signals: list[MomentumSignal] = Field(default_factory=list)
    cross_source_correlations: list[CrossSourceCorrelation] = Field(
        default_factory=list
    )
    predictive_signals: list[PredictiveSignal] = Field(default_factory=list)
    compound_signals: list[CompoundSignal] = Field(default_factory=list)
    topic_stats: dict[str, TopicStats] = Field(default_factory=dict)

    @property
    def total_signals(self) -> int:
        return (
            len(self.emerging_patterns)
            + len(self.momentum_signals)
            + len(self.predictive_signals)
            + len(self.compound_signals)
        )

    @property
    def status(self) -> str:
        if self.total_signals == 0:
            return "MONITORING"
        return f"{self.total_signals} SIGNALS"


class CorrelationSummary(BaseModel):
    """Summary of correlation analysis."""

    total_signals: int
    status: str
    top_patterns: list[str] = Field(default_factory=list)
    top_momentum: list[str] = Field(default_factory=list)
    top_compound: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


# Narrative tracking


class NarrativeData(BaseModel):
    """A fringe narrative observed in the current batch."""

    id: str
    name: str
    category: str
    severity: Literal["watch", "emerging", "spreading", "disinfo"]
    count: int
    fringe_count: int = 0
    alternative_count: int = 0
    mainstream_count: int = 0
    sources: list[str] = Field(default_factory=list)
    headlines: list[NewsItem] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    first_seen: int | None = None


class EmergingFringe(NarrativeData):
    status: Literal["emerging", "spreading", "viral"]


class FringeToMainstream(NarrativeData):
    status: Literal["crossing"] = "crossing"
    crossover_level: float


class TrendingNarrative(BaseModel):
    """A mainstream narrative with at least the minimum number of mentions."""

    id: str
    name: str
    category: str
    region: Literal["global", "brazil", "latam", "mena"] | None = None
    count: int
    sources: list[str] = Field(default_factory=list)
    headlines: list[NewsItem] = Field(default_factory=list)
    momentum: Literal["rising", "stable", "falling"]
    sentiment: Literal["positive", "neutral", "negative"]
    first_seen: int | None = None


class NarrativeResults(BaseModel):
    """Complete narrative analysis results."""

    trending_narratives: list[TrendingNarrative] = Field(default_factory=list)
    emerging_fringe: list[EmergingFringe] = Field(default_factory=list)
    fringe_to_mainstream: list[FringeToMainstream] = Field(default_factory=list)
    narrative_watch: list[NarrativeData] = Field(default_factory=list)
    disinfo_signals: list[NarrativeData] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.trending_narratives)
            + len(self.emerging_fringe)
            + len(self.fringe_to_mainstream)
            + len(self.narrative_watch)
            + len(self.disinfo_signals)
        )

    @property
    def status(self) -> str:
        if self.total == 0:
            return "MONITORING"
        return f"{self.total} ACTIVE"


class NarrativeSummary(BaseModel):
    """Summary of narrative analysis."""

    total: int
    status: str
    top_trending: list[str] = Field(default_factory=list)
    crossovers: list[str] = Field(default_factory=list)


def as_news_item(item: NewsItem | Mapping[str, Any]) -> NewsItem | None:
    """Accept a NewsItem or a plain dict; None for anything unusable."""
    if isinstance(item, NewsItem):
        return item
    if isinstance(item, Mapping):
        try:
            return NewsItem.model_validate({"id": "", **item})
        except ValueError:
            return None
    return None
