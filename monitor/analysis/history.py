"""
Rolling history for the analysis engines.

Each engine owns one history object. The correlation history keeps hourly
topic counts behind a key-value store plus in-memory per-minute buckets and
velocity series; the narrative history keeps recent mention counts per
narrative. All of it is best-effort: losing it only means z-scores and
momentum start from scratch.
"""

import json
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from loguru import logger


class KeyValueStore(Protocol):
    """Minimal persistence interface for rolling history."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Process-local store, lost on restart."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Store backed by a single JSON file.

    The file holds one object keyed by store key. It is read once and kept in
    memory; writes go to a temp file that replaces the original, so a crash
    never leaves half a document.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, Any] | None = None
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _loaded(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._read()
        return self._data

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._loaded().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = dict(self._loaded())
            data[key] = value
            self._write(data)
            self._data = data

    def delete(self, key: str) -> None:
        with self._lock:
            data = dict(self._loaded())
            if data.pop(key, None) is not None:
                self._write(data)
                self._data = data


@dataclass
class PersistedHistory:
    """Hourly topic counts, newest last."""

    hourly_counts: dict[str, list[int]] = field(default_factory=dict)
    last_hour: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"hourly_counts": self.hourly_counts, "last_hour": self.last_hour}

    @classmethod
    def from_dict(cls, data: Any) -> "PersistedHistory":
        if not isinstance(data, dict) or not isinstance(
            data.get("hourly_counts"), dict
        ):
            return cls()
        hourly = {
            str(topic_id): [int(c) for c in counts]
            for topic_id, counts in data["hourly_counts"].items()
            if isinstance(counts, list)
        }
        last_hour = data.get("last_hour")
        return cls(
            hourly_counts=hourly,
            last_hour=int(last_hour) if last_hour is not None else None,
        )


class CorrelationHistory:
    """
    Rolling state for the correlation engine.

    - hourly counts per topic (last 168 hours), persisted through a store
    - per-minute topic counts (last 30 minutes), in memory
    - velocity series per topic (last 10 values, newest first), in memory
    """

    STORAGE_KEY = "correlation_history"
    HISTORY_HOURS = 168
    RETENTION_MINUTES = 30
    VELOCITY_SERIES_LENGTH = 10

    def __init__(self, store: KeyValueStore | None = None):
        self.store: KeyValueStore = store if store is not None else InMemoryStore()
        self.lock = threading.RLock()
        self._minute_counts: dict[int, dict[str, int]] = {}
        self._velocity: dict[str, list[float]] = {}
        self._velocity_minute: dict[str, int] = {}

    # Hourly (persisted)

    def load(self) -> PersistedHistory:
        """Load persisted hourly history; empty on any store failure."""
        try:
            return PersistedHistory.from_dict(self.store.get(self.STORAGE_KEY))
        except Exception as e:
            logger.warning(f"Failed to load correlation history: {e}")
            return PersistedHistory()

    def save(self, history: PersistedHistory) -> None:
        try:
            self.store.set(self.STORAGE_KEY, history.to_dict())
        except Exception as e:
            logger.warning(f"Failed to save correlation history: {e}")

    def update_hourly(self, topic_counts: dict[str, int], hour: int) -> PersistedHistory:
        """Append this hour's counts once; later calls in the same hour are no-ops."""
        with self.lock:
            history = self.load()
            if history.last_hour is not None and hour <= history.last_hour:
                return history

            for topic_id, count in topic_counts.items():
                counts = history.hourly_counts.setdefault(topic_id, [])
                counts.append(count)
                if len(counts) > self.HISTORY_HOURS:
                    history.hourly_counts[topic_id] = counts[-self.HISTORY_HOURS :]
            history.last_hour = hour
            self.save(history)
            return history

    def clear_persisted(self) -> None:
        with self.lock:
            try:
                self.store.delete(self.STORAGE_KEY)
            except Exception as e:
                logger.warning(f"Failed to clear correlation history: {e}")

    # Per-minute (in memory)

    def record_minute(self, minute: int, topic_counts: dict[str, int]) -> bool:
        """Record counts for a minute bucket if not yet seen. Returns True if recorded."""
        with self.lock:
            if minute in self._minute_counts:
                return False
            self._minute_counts[minute] = dict(topic_counts)
            for key in [k for k in self._minute_counts if minute - k > self.RETENTION_MINUTES]:
                del self._minute_counts[key]
            return True

    def minute_counts(self) -> dict[int, dict[str, int]]:
        with self.lock:
            return {k: dict(v) for k, v in self._minute_counts.items()}

    def counts_at(self, minute: int) -> dict[str, int]:
        with self.lock:
            return dict(self._minute_counts.get(minute, {}))

    def push_velocity(self, topic_id: str, minute: int, velocity: float) -> list[float]:
        """
        Add a velocity reading, one per minute bucket.

        A second reading in the same minute replaces the head so repeated
        calls inside a minute leave the series unchanged in length.
        """
        with self.lock:
            series = self._velocity.setdefault(topic_id, [])
            if series and self._velocity_minute.get(topic_id) == minute:
                series[0] = velocity
            else:
                series.insert(0, velocity)
                del series[self.VELOCITY_SERIES_LENGTH :]
                self._velocity_minute[topic_id] = minute
            return list(series)

    def velocity_series(self, topic_id: str) -> list[float]:
        with self.lock:
            return list(self._velocity.get(topic_id, []))

    def clear(self) -> None:
        """Clear in-memory minute buckets and velocity series."""
        with self.lock:
            self._minute_counts.clear()
            self._velocity.clear()
            self._velocity_minute.clear()


@dataclass
class NarrativeHistoryEntry:
    first_seen: int
    counts: list[tuple[int, int]] = field(default_factory=list)
    sources: set[str] = field(default_factory=set)


class NarrativeHistory:
    """Mention counts per narrative (last 10 observations) plus first-seen time."""

    MAX_POINTS = 10

    def __init__(self):
        self.lock = threading.RLock()
        self._entries: dict[str, NarrativeHistoryEntry] = {}

    def touch(self, key: str, now_ms: int, sources: set[str]) -> NarrativeHistoryEntry:
        with self.lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = NarrativeHistoryEntry(first_seen=now_ms)
                self._entries[key] = entry
            entry.sources.update(sources)
            return entry

    def record_count(
        self, key: str, now_ms: int, count: int, sources: set[str]
    ) -> NarrativeHistoryEntry:
        with self.lock:
            entry = self.touch(key, now_ms, sources)
            entry.counts.append((now_ms, count))
            del entry.counts[: -self.MAX_POINTS]
            return entry

    def counts(self, key: str) -> list[int]:
        with self.lock:
            entry = self._entries.get(key)
            return [c for _, c in entry.counts] if entry else []

    def get(self, key: str) -> NarrativeHistoryEntry | None:
        with self.lock:
            return self._entries.get(key)

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()
