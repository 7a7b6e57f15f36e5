"""
Text matchers used by the pattern tables.

Correlation topics and mainstream narratives match with case-insensitive
regular expressions; fringe narratives match with plain keyword containment.
Both expose the same ``matches(text)`` call so the engines never need to know
which kind they hold.
"""

import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class Matcher(Protocol):
    """Anything that can decide whether a piece of text matches."""

    def matches(self, text: str) -> bool: ...


class RegexMatcher:
    """Case-insensitive regular expression search."""

    __slots__ = ("pattern",)

    def __init__(self, pattern: str | re.Pattern[str]):
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            self.pattern = re.compile(pattern, re.IGNORECASE)

    def matches(self, text: str) -> bool:
        return bool(text) and self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self.pattern.pattern!r})"


class SubstringMatcher:
    """Case-insensitive substring containment."""

    __slots__ = ("keyword",)

    def __init__(self, keyword: str):
        self.keyword = keyword.lower()

    def matches(self, text: str) -> bool:
        return bool(text) and self.keyword in text.lower()

    def __repr__(self) -> str:
        return f"SubstringMatcher({self.keyword!r})"


def regex(*patterns: str) -> list[Matcher]:
    """Build a list of regex matchers."""
    return [RegexMatcher(p) for p in patterns]


def keywords(*words: str) -> list[Matcher]:
    """Build a list of substring matchers."""
    return [SubstringMatcher(w) for w in words]


def any_match(matchers: list[Matcher], text: str) -> bool:
    """True if any matcher accepts the text."""
    return any(m.matches(text) for m in matchers)
