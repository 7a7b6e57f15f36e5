"""Unit tests for monitor.analysis.history.

Covers:
- InMemoryStore and JsonFileStore get/set/delete
- CorrelationHistory: hourly append once per hour, pruning, soft store failures
- Minute buckets, velocity series and clear()
- NarrativeHistory bounded series and first-seen tracking
"""

from __future__ import annotations

import json
import threading

from monitor.analysis.history import (
    CorrelationHistory,
    InMemoryStore,
    JsonFileStore,
    NarrativeHistory,
    PersistedHistory,
)


class BrokenStore:
    """Store whose every call fails, like a read-only or corrupted file."""

    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("disk on fire")

    def delete(self, key):
        raise OSError("disk on fire")


# ── Stores ───────────────────────────────────────────────────────────────────────

class TestStores:
    def test_in_memory_round_trip(self):
        store = InMemoryStore()
        store.set("k", {"a": 1})
        assert store.get("k") == {"a": 1}
        store.delete("k")
        assert store.get("k") is None
        store.delete("missing")

    def test_json_file_store_persists(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        JsonFileStore(path).set("k", [1, 2, 3])

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": [1, 2, 3]}
        assert JsonFileStore(path).get("k") == [1, 2, 3]

    def test_json_file_store_missing_file(self, tmp_path):
        assert JsonFileStore(tmp_path / "absent.json").get("k") is None

    def test_json_file_store_delete_keeps_other_keys(self, tmp_path):
        store = JsonFileStore(tmp_path / "h.json")
        store.set("a", 1)
        store.set("b", 2)
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == 2

    def test_json_file_store_reads_file_once(self, tmp_path):
        path = tmp_path / "h.json"
        path.write_text(json.dumps({"k": 1}), encoding="utf-8")
        store = JsonFileStore(path)
        assert store.get("k") == 1

        path.unlink()

        assert store.get("k") == 1
        store.set("j", 2)
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": 1, "j": 2}


# ── Correlation history ──────────────────────────────────────────────────────────

class TestHourlyHistory:
    def test_appends_once_per_hour(self):
        history = CorrelationHistory()
        history.update_hourly({"t": 3}, hour=10)
        history.update_hourly({"t": 9}, hour=10)
        persisted = history.update_hourly({"t": 4}, hour=11)

        assert persisted.hourly_counts["t"] == [3, 4]
        assert persisted.last_hour == 11

    def test_keeps_last_168_hours(self):
        history = CorrelationHistory()
        for hour in range(200):
            persisted = history.update_hourly({"t": hour}, hour=hour)
        assert len(persisted.hourly_counts["t"]) == CorrelationHistory.HISTORY_HOURS
        assert persisted.hourly_counts["t"][-1] == 199

    def test_survives_restart_through_store(self, tmp_path):
        store = JsonFileStore(tmp_path / "h.json")
        CorrelationHistory(store).update_hourly({"t": 3}, hour=10)

        reloaded = CorrelationHistory(JsonFileStore(tmp_path / "h.json")).load()
        assert reloaded.hourly_counts == {"t": [3]}
        assert reloaded.last_hour == 10

    def test_broken_store_is_soft(self):
        """Store failures must never raise out of the history."""
        history = CorrelationHistory(BrokenStore())
        persisted = history.update_hourly({"t": 3}, hour=10)

        assert persisted.hourly_counts == {"t": [3]}
        assert history.load() == PersistedHistory()
        history.clear_persisted()

    def test_malformed_payload_loads_empty(self):
        store = InMemoryStore()
        store.set(CorrelationHistory.STORAGE_KEY, "not a dict")
        assert CorrelationHistory(store).load() == PersistedHistory()

    def test_clear_persisted(self):
        history = CorrelationHistory()
        history.update_hourly({"t": 3}, hour=10)
        history.clear_persisted()
        assert history.load() == PersistedHistory()


class TestMinuteHistory:
    def test_first_write_per_minute_wins(self):
        history = CorrelationHistory()
        assert history.record_minute(100, {"t": 1})
        assert not history.record_minute(100, {"t": 5})
        assert history.counts_at(100) == {"t": 1}

    def test_old_minutes_pruned(self):
        history = CorrelationHistory()
        history.record_minute(100, {"t": 1})
        history.record_minute(131, {"t": 2})
        assert set(history.minute_counts()) == {131}

    def test_velocity_series_one_reading_per_minute(self):
        history = CorrelationHistory()
        history.push_velocity("t", 100, 0.1)
        history.push_velocity("t", 100, 0.3)
        series = history.push_velocity("t", 101, 0.5)
        assert series == [0.5, 0.3]

    def test_velocity_series_bounded(self):
        history = CorrelationHistory()
        for minute in range(15):
            history.push_velocity("t", minute, float(minute))
        series = history.velocity_series("t")
        assert len(series) == CorrelationHistory.VELOCITY_SERIES_LENGTH
        assert series[0] == 14.0

    def test_clear_leaves_persisted_alone(self):
        history = CorrelationHistory()
        history.update_hourly({"t": 3}, hour=10)
        history.record_minute(100, {"t": 1})
        history.push_velocity("t", 100, 0.1)

        history.clear()

        assert history.minute_counts() == {}
        assert history.velocity_series("t") == []
        assert history.load().hourly_counts == {"t": [3]}


# ── Narrative history ────────────────────────────────────────────────────────────

class TestNarrativeHistory:
    def test_first_seen_sticks(self):
        history = NarrativeHistory()
        history.record_count("n", 1000, 2, {"A"})
        entry = history.record_count("n", 5000, 3, {"B", ""})

        assert entry.first_seen == 1000
        assert entry.sources == {"A", "B", ""}
        assert history.counts("n") == [2, 3]

    def test_series_bounded(self):
        history = NarrativeHistory()
        for i in range(15):
            history.record_count("n", i, i, set())
        assert history.counts("n") == list(range(5, 15))

    def test_touch_does_not_add_counts(self):
        history = NarrativeHistory()
        history.touch("n", 1000, {"A"})
        assert history.counts("n") == []
        assert history.get("n").first_seen == 1000

    def test_get_waits_for_lock(self):
        history = NarrativeHistory()
        history.touch("n", 1000, {"A"})
        found = []

        with history.lock:
            reader = threading.Thread(target=lambda: found.append(history.get("n")))
            reader.start()
            reader.join(timeout=0.05)
            assert found == []

        reader.join()
        assert found[0].first_seen == 1000

    def test_clear(self):
        history = NarrativeHistory()
        history.record_count("n", 1000, 2, set())
        history.clear()
        assert history.get("n") is None
        assert history.counts("n") == []
