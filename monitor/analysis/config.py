"""
Analysis configuration - correlation topics, keywords, source weights and
source classification.
"""

import re
from dataclasses import dataclass
from enum import Enum

from monitor.analysis.matchers import Matcher, regex


# Alert keywords for high-priority detection
ALERT_KEYWORDS: tuple[str, ...] = (
    "war",
    "invasion",
    "military",
    "nuclear",
    "sanctions",
    "missile",
    "attack",
    "troops",
    "conflict",
    "strike",
    "bomb",
    "casualties",
    "ceasefire",
    "treaty",
    "nato",
    "coup",
    "martial law",
    "emergency",
    "assassination",
    "terrorist",
    "hostage",
    "evacuation",
)

# Region keyword mapping
REGION_KEYWORDS: dict[str, list[str]] = {
    "EUROPE": [
        "nato",
        "eu",
        "european",
        "ukraine",
        "russia",
        "germany",
        "france",
        "uk",
        "britain",
        "poland",
    ],
    "MENA": [
        "iran",
        "israel",
        "saudi",
        "syria",
        "iraq",
        "gaza",
        "lebanon",
        "yemen",
        "houthi",
        "middle east",
    ],
    "APAC": [
        "china",
        "taiwan",
        "japan",
        "korea",
        "indo-pacific",
        "south china sea",
        "asean",
        "philippines",
    ],
    "AMERICAS": ["us", "america", "canada", "mexico", "brazil", "venezuela", "latin"],
    "AFRICA": ["africa", "sahel", "niger", "sudan", "ethiopia", "somalia"],
}

# Topic keyword mapping
TOPIC_KEYWORDS: dict[str, list[str]] = {
    "CYBER": ["cyber", "hack", "ransomware", "malware", "breach", "apt", "vulnerability"],
    "NUCLEAR": ["nuclear", "icbm", "warhead", "nonproliferation", "uranium", "plutonium"],
    "CONFLICT": [
        "war",
        "military",
        "troops",
        "invasion",
        "strike",
        "missile",
        "combat",
        "offensive",
    ],
    "INTEL": ["intelligence", "espionage", "spy", "cia", "mossad", "fsb", "covert"],
    "DEFENSE": ["pentagon", "dod", "defense", "military", "army", "navy", "air force"],
    "DIPLO": ["diplomat", "embassy", "treaty", "sanctions", "talks", "summit", "bilateral"],
    "ECON": [
        "economy",
        "economic",
        "inflation",
        "recession",
        "gdp",
        "interest rate",
        "fiscal",
        "currency",
        "central bank",
        "imf",
        "unemployment",
    ],
    "ELECTIONS": ["election", "vote", "ballot", "candidate", "campaign", "referendum"],
    "UNREST": ["protest", "riot", "uprising", "unrest", "crackdown", "revolt"],
    "TRADE": ["tariff", "trade war", "embargo", "brics", "export ban", "trade deal"],
    "ENERGY": ["oil", "pipeline", "opec", "petroleum", "lithium", "natural gas"],
}


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Whole-word match so "us" does not fire inside "business"
    escaped = re.escape(keyword.strip()).replace(r"\ ", r"\s+")
    return re.compile(rf"(?<![\w]){escaped}(?![\w])", re.IGNORECASE)


_ALERT_PATTERNS = [(k, _keyword_pattern(k)) for k in ALERT_KEYWORDS]
_REGION_PATTERNS = {
    region: [_keyword_pattern(k) for k in words]
    for region, words in REGION_KEYWORDS.items()
}
_TOPIC_PATTERNS = {
    topic: [_keyword_pattern(k) for k in words] for topic, words in TOPIC_KEYWORDS.items()
}


@dataclass(frozen=True)
class CorrelationTopic:
    """Topic definition with its matchers."""

    id: str
    patterns: list[Matcher]
    category: str

    def matches(self, text: str) -> bool:
        return any(p.matches(text) for p in self.patterns)


# Correlation topics
CORRELATION_TOPICS: list[CorrelationTopic] = [
    CorrelationTopic(
        id="tariffs",
        patterns=regex(r"tariff", r"trade war", r"import tax", r"customs duty"),
        category="Economy",
    ),
    CorrelationTopic(
        id="fed-rates",
        patterns=regex(
            r"federal reserve",
            r"interest rate",
            r"rate cut",
            r"rate hike",
            r"powell",
            r"fomc",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="inflation",
        patterns=regex(r"inflation", r"\bcpi\b", r"consumer price", r"cost of living"),
        category="Economy",
    ),
    CorrelationTopic(
        id="recession",
        patterns=regex(r"recession", r"economic downturn", r"gdp.*declin"),
        category="Economy",
    ),
    CorrelationTopic(
        id="ai-regulation",
        patterns=regex(
            r"ai regulation",
            r"artificial intelligence.*law",
            r"ai safety",
            r"ai governance",
        ),
        category="Tech",
    ),
    CorrelationTopic(
        id="ai-breakthrough",
        patterns=regex(
            r"gpt-?5", r"\bagi\b", r"artificial general", r"ai breakthrough", r"llm.*advance"
        ),
        category="Tech",
    ),
    CorrelationTopic(
        id="china-tensions",
        patterns=regex(
            r"china.*taiwan", r"south china sea", r"\bus\b.*china", r"beijing.*washington"
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="russia-ukraine",
        patterns=regex(
            r"ukraine", r"zelensky", r"putin.*war", r"crimea", r"donbas", r"kyiv"
        ),
        category="Conflict",
    ),
    CorrelationTopic(
        id="israel-gaza",
        patterns=regex(r"gaza", r"hamas", r"netanyahu", r"israel.*attack", r"hostage"),
        category="Conflict",
    ),
    CorrelationTopic(
        id="iran",
        patterns=regex(
            r"iran.*nuclear", r"tehran", r"ayatollah", r"iranian.*strike", r"\birgc\b"
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="north-korea",
        patterns=regex(
            r"north korea", r"pyongyang", r"kim jong", r"\bdprk\b", r"korean.*missile"
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="crypto",
        patterns=regex(r"bitcoin", r"crypto.*regulation", r"ethereum", r"sec.*crypto"),
        category="Finance",
    ),
    CorrelationTopic(
        id="housing",
        patterns=regex(
            r"housing market", r"mortgage rate", r"home price", r"real estate.*crash"
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="layoffs",
        patterns=regex(r"layoff", r"job cut", r"workforce reduction", r"downsizing"),
        category="Business",
    ),
    CorrelationTopic(
        id="bank-crisis",
        patterns=regex(r"bank.*fail", r"banking crisis", r"\bfdic\b", r"bank run"),
        category="Finance",
    ),
    CorrelationTopic(
        id="election",
        patterns=regex(r"election", r"polling", r"campaign", r"ballot", r"voter"),
        category="Politics",
    ),
    CorrelationTopic(
        id="immigration",
        patterns=regex(
            r"immigration", r"border.*crisis", r"migrant", r"deportation", r"asylum"
        ),
        category="Politics",
    ),
    CorrelationTopic(
        id="climate",
        patterns=regex(
            r"climate change", r"wildfire", r"hurricane", r"extreme weather", r"flood"
        ),
        category="Environment",
    ),
    CorrelationTopic(
        id="pandemic",
        patterns=regex(
            r"pandemic", r"outbreak", r"virus.*spread", r"who.*emergency", r"bird flu"
        ),
        category="Health",
    ),
    CorrelationTopic(
        id="nuclear",
        patterns=regex(r"nuclear.*threat", r"nuclear weapon", r"atomic", r"\bicbm\b"),
        category="Security",
    ),
    CorrelationTopic(
        id="supply-chain",
        patterns=regex(
            r"supply chain", r"shipping.*delay", r"port.*congestion", r"logistics.*crisis"
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="big-tech",
        patterns=regex(
            r"antitrust.*tech", r"google.*monopoly", r"meta.*lawsuit", r"apple.*doj"
        ),
        category="Tech",
    ),
    CorrelationTopic(
        id="deepfake",
        patterns=regex(r"deepfake", r"ai.*misinformation", r"synthetic media"),
        category="Tech",
    ),
    CorrelationTopic(
        id="cyberattack",
        patterns=regex(
            r"cyberattack",
            r"cyber attack",
            r"data breach",
            r"ransomware",
            r"hacking",
            r"zero.day",
        ),
        category="Security",
    ),
    CorrelationTopic(
        id="state-hacking",
        patterns=regex(
            r"state.sponsored", r"\bapt\b", r"cyber espionage", r"cyber warfare"
        ),
        category="Security",
    ),
    CorrelationTopic(
        id="space-military",
        patterns=regex(
            r"space force",
            r"satellite weapon",
            r"anti.satellite",
            r"space militariz",
            r"orbital weapon",
        ),
        category="Security",
    ),
    CorrelationTopic(
        id="space-race",
        patterns=regex(
            r"space launch", r"spacex", r"moon mission", r"mars mission", r"space station"
        ),
        category="Tech",
    ),
    CorrelationTopic(
        id="energy-transition",
        patterns=regex(
            r"renewable energy",
            r"\bsolar\b.*power",
            r"wind power",
            r"green energy",
            r"clean energy",
            r"energy transition",
        ),
        category="Environment",
    ),
    CorrelationTopic(
        id="rare-earths",
        patterns=regex(
            r"rare earth",
            r"lithium",
            r"cobalt",
            r"critical mineral",
            r"semiconductor supply",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="oil-opec",
        patterns=regex(
            r"\bopec\b",
            r"oil price",
            r"oil production",
            r"crude oil",
            r"petroleum",
            r"oil cut",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="sanctions",
        patterns=regex(
            r"\bsanction",
            r"swift ban",
            r"asset freeze",
            r"export control",
            r"trade restriction",
            r"\bembargo\b",
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="trade-blocs",
        patterns=regex(
            r"\bbrics\b",
            r"g7 summit",
            r"\bg20\b",
            r"trade agreement",
            r"trade bloc",
            r"economic alliance",
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="food-security",
        patterns=regex(
            r"food crisis",
            r"crop failure",
            r"grain export",
            r"food price",
            r"\bfamine\b",
            r"food shortage",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="agriculture",
        patterns=regex(
            r"fertilizer", r"\bdrought\b", r"\bharvest\b", r"agriculture", r"farming crisis"
        ),
        category="Environment",
    ),
    CorrelationTopic(
        id="sovereign-debt",
        patterns=regex(
            r"national debt",
            r"debt ceiling",
            r"fiscal deficit",
            r"credit rating",
            r"bond yield",
            r"\btreasury\b",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="credit-stress",
        patterns=regex(
            r"credit crunch", r"default risk", r"junk bond", r"high yield", r"credit spread"
        ),
        category="Finance",
    ),
    CorrelationTopic(
        id="civil-unrest",
        patterns=regex(
            r"\bprotest",
            r"\briot",
            r"civil unrest",
            r"demonstration",
            r"\bstrike\b",
            r"\buprising\b",
        ),
        category="Politics",
    ),
    CorrelationTopic(
        id="political-violence",
        patterns=regex(
            r"assassination",
            r"political violence",
            r"insurrection",
            r"\bcoup\b",
            r"\bextremism\b",
            r"domestic terror",
        ),
        category="Security",
    ),
    CorrelationTopic(
        id="biotech",
        patterns=regex(
            r"gene therapy",
            r"\bcrispr\b",
            r"biotech breakthrough",
            r"drug approval",
            r"fda approval",
        ),
        category="Health",
    ),
    CorrelationTopic(
        id="antimicrobial",
        patterns=regex(
            r"antibiotic resistance", r"superbug", r"antimicrobial", r"drug.resistant"
        ),
        category="Health",
    ),
    CorrelationTopic(
        id="refugee-crisis",
        patterns=regex(
            r"\brefugee",
            r"\bdisplaced\b",
            r"humanitarian crisis",
            r"refugee camp",
            r"migration crisis",
        ),
        category="Politics",
    ),
    CorrelationTopic(
        id="demographics",
        patterns=regex(
            r"aging population",
            r"birth rate",
            r"fertility rate",
            r"population decline",
            r"brain drain",
        ),
        category="Economy",
    ),
    CorrelationTopic(
        id="arms-race",
        patterns=regex(
            r"arms deal",
            r"weapons sale",
            r"military buildup",
            r"defense spending",
            r"arms race",
            r"conscription",
        ),
        category="Security",
    ),
    CorrelationTopic(
        id="nato-defense",
        patterns=regex(
            r"nato spending",
            r"nato expansion",
            r"european defense",
            r"military alliance",
            r"collective defense",
        ),
        category="Geopolitics",
    ),
    CorrelationTopic(
        id="extreme-weather",
        patterns=regex(
            r"extreme weather",
            r"heat wave",
            r"polar vortex",
            r"\btornado\b",
            r"\btyphoon\b",
            r"\bcyclone\b",
            r"ice storm",
            r"record temperature",
            r"climate emergency",
            r"weather disaster",
        ),
        category="Environment",
    ),
]


# Source credibility weights, checked in order against the normalized name
SOURCE_WEIGHTS: dict[str, float] = {
    # Wire services
    "reuters": 1.5,
    "ap": 1.5,
    "afp": 1.5,
    # Major outlets
    "bbc": 1.2,
    "nytimes": 1.2,
    "wsj": 1.2,
    "wapo": 1.2,
    "guardian": 1.2,
    "cnn": 1.2,
    "ft": 1.2,
    "economist": 1.2,
    # Partisan/tabloid
    "breitbart": 0.7,
    "dailymail": 0.7,
    "nypost": 0.7,
    # Known unreliable
    "zerohedge": 0.4,
    "infowars": 0.4,
    "naturalnews": 0.4,
}

DEFAULT_SOURCE_WEIGHT = 1.0

_NON_LETTERS = re.compile(r"[^a-z]")


def get_source_weight(source: str | None) -> float:
    """Credibility weight for a source name, 1.0 when unlisted."""
    normalized = _NON_LETTERS.sub("", (source or "").lower())
    for key, weight in SOURCE_WEIGHTS.items():
        if key in normalized:
            return weight
    return DEFAULT_SOURCE_WEIGHT


class SourceType(str, Enum):
    """Provenance class of a news source."""

    FRINGE = "fringe"
    ALTERNATIVE = "alternative"
    MAINSTREAM = "mainstream"


SOURCE_TYPES: dict[SourceType, tuple[str, ...]] = {
    SourceType.FRINGE: (
        "zerohedge",
        "infowars",
        "naturalnews",
        "gateway",
        "breitbart",
        "epoch",
        "revolver",
        "dailycaller",
    ),
    SourceType.ALTERNATIVE: (
        "substack",
        "rumble",
        "bitchute",
        "telegram",
        "gab",
        "gettr",
        "truth social",
    ),
    SourceType.MAINSTREAM: (
        # Wire services
        "reuters",
        "ap news",
        "afp",
        # Major international
        "bbc",
        "cnn",
        "nytimes",
        "wsj",
        "wapo",
        "guardian",
        "abc",
        "nbc",
        "cbs",
        "fox",
        "al jazeera",
        "economist",
        "npr",
        # Business/Finance
        "bloomberg",
        "cnbc",
        "marketwatch",
        "financial times",
        "ft.com",
        "yahoo finance",
        "investing.com",
        # Politics
        "politico",
        "foreign affairs",
        "foreign policy",
        # Tech
        "hacker news",
        "ars technica",
        "verge",
        "mit tech",
        "openai",
        "arxiv",
        # Intel/Defense
        "defense one",
        "breaking defense",
        "war on the rocks",
        "defense news",
        "war zone",
        "realcleardefense",
        "csis",
        "bellingcat",
        "chatham house",
        "iiss",
        "military.com",
        "cfr",
        "brookings",
        "diplomat",
        "al-monitor",
        # Brazil
        "g1",
        "globo",
        "folha",
        "cnn brasil",
        "gazeta do povo",
        "poder360",
        "agencia brasil",
        "infomoney",
        "valor",
        "defesanet",
        "zona militar",
        # Latin America
        "americas quarterly",
        "el pais",
        "infobae",
        "caracas chronicles",
        "el nacional",
        "venezuelanalysis",
        # Middle East
        "tehran times",
        "radio farda",
        "mehr news",
        "isna",
        "ifp news",
        "iranwire",
        # Arctic
        "arctic today",
        "high north news",
        "arctic institute",
        "arctic council",
    ),
}


def classify_source(source: str | None) -> SourceType | None:
    """Classify a source name; fringe wins over alternative over mainstream."""
    lower_source = (source or "").lower()
    if not lower_source:
        return None
    for source_type in (SourceType.FRINGE, SourceType.ALTERNATIVE, SourceType.MAINSTREAM):
        if any(name in lower_source for name in SOURCE_TYPES[source_type]):
            return source_type
    return None


def get_topic_by_id(topic_id: str) -> CorrelationTopic | None:
    """Get a topic by its ID."""
    for topic in CORRELATION_TOPICS:
        if topic.id == topic_id:
            return topic
    return None


def detect_region(text: str) -> str | None:
    """Detect region from text."""
    for region, patterns in _REGION_PATTERNS.items():
        if any(p.search(text) for p in patterns):
            return region
    return None


def detect_topics(text: str) -> list[str]:
    """Detect topics from text."""
    return [
        topic
        for topic, patterns in _TOPIC_PATTERNS.items()
        if any(p.search(text) for p in patterns)
    ]


def contains_alert_keyword(text: str) -> tuple[bool, str | None]:
    """Check if text contains alert keywords."""
    for keyword, pattern in _ALERT_PATTERNS:
        if pattern.search(text):
            return True, keyword
    return False, None
