"""Unit tests for monitor.services.circuit_breaker.

Covers:
- CLOSED -> OPEN after the failure threshold
- OPEN -> HALF_OPEN after the reset timeout, trial limit in HALF_OPEN
- HALF_OPEN -> CLOSED on success, back to OPEN on failure
- A released or overdue half-open slot lets the next call through
- Registry creation with per-service config, status and reset
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from monitor.services.circuit_breaker import (
    FEED_BREAKER_CONFIG,
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerRegistry,
    CircuitState,
)


@pytest.fixture
def breaker(dt_clock) -> CircuitBreaker:
    config = CircuitBreakerConfig(failure_threshold=2, reset_timeout=timedelta(minutes=5))
    return CircuitBreaker("feed:test", config, clock=dt_clock)


def _trip(cb: CircuitBreaker) -> None:
    for _ in range(cb.config.failure_threshold):
        cb.record_failure()


class TestTransitions:
    def test_starts_closed(self, breaker):
        assert breaker.state == CircuitState.CLOSED
        assert breaker.can_request()

    def test_opens_at_threshold(self, breaker):
        breaker.record_failure()
        assert breaker.state == CircuitState.CLOSED

        breaker.record_failure()
        assert breaker.state == CircuitState.OPEN
        assert not breaker.can_request()

    def test_success_resets_failure_count(self, breaker):
        breaker.record_failure()
        breaker.record_success()
        breaker.record_failure()
        assert breaker.state == CircuitState.CLOSED

    def test_half_open_after_timeout(self, breaker, dt_clock):
        _trip(breaker)
        dt_clock.advance(minutes=4, seconds=59)
        assert breaker.state == CircuitState.OPEN

        dt_clock.advance(seconds=1)
        assert breaker.state == CircuitState.HALF_OPEN

    def test_half_open_allows_one_trial(self, breaker, dt_clock):
        """Only half_open_max_requests trials may pass while half-open."""
        _trip(breaker)
        dt_clock.advance(minutes=5)

        assert breaker.can_request()
        assert not breaker.can_request()

    def test_released_slot_allows_next_call(self, breaker, dt_clock):
        _trip(breaker)
        dt_clock.advance(minutes=5)
        assert breaker.can_request()

        breaker.release_trial()

        assert breaker.state == CircuitState.HALF_OPEN
        assert breaker.can_request()
        assert not breaker.can_request()

    def test_unreported_slot_rearms_after_reset_timeout(self, breaker, dt_clock):
        """A half-open call that never reports back blocks only until reset_timeout."""
        _trip(breaker)
        dt_clock.advance(minutes=5)
        assert breaker.can_request()

        dt_clock.advance(minutes=4)
        assert not breaker.can_request()

        dt_clock.advance(minutes=1)
        assert breaker.can_request()
        assert not breaker.can_request()

    def test_release_outside_half_open_is_ignored(self, breaker):
        breaker.release_trial()
        _trip(breaker)
        breaker.release_trial()
        assert not breaker.can_request()

    def test_trial_success_closes(self, breaker, dt_clock):
        _trip(breaker)
        dt_clock.advance(minutes=5)
        assert breaker.can_request()

        breaker.record_success()

        assert breaker.state == CircuitState.CLOSED
        assert breaker.can_request()

    def test_trial_failure_reopens(self, breaker, dt_clock):
        _trip(breaker)
        dt_clock.advance(minutes=5)
        assert breaker.can_request()

        breaker.record_failure()

        assert breaker.state == CircuitState.OPEN
        assert breaker.get_time_until_reset() == pytest.approx(300.0)

    def test_time_until_reset(self, breaker, dt_clock):
        assert breaker.get_time_until_reset() is None
        _trip(breaker)
        dt_clock.advance(minutes=2)
        assert breaker.get_time_until_reset() == pytest.approx(180.0)

    def test_manual_reset(self, breaker):
        _trip(breaker)
        breaker.reset()
        assert breaker.get_state() == CircuitState.CLOSED
        assert breaker.get_status()["failure_count"] == 0

    def test_status_payload(self, breaker, dt_clock):
        _trip(breaker)
        status = breaker.get_status()
        assert status["service_id"] == "feed:test"
        assert status["state"] == "OPEN"
        assert status["failure_count"] == 2
        assert status["last_failure"] == dt_clock().isoformat()


class TestRegistry:
    def test_get_reuses_breaker(self, dt_clock):
        registry = CircuitBreakerRegistry(clock=dt_clock)
        assert registry.get("a") is registry.get("a")

    def test_config_applied_on_creation(self, dt_clock):
        registry = CircuitBreakerRegistry(clock=dt_clock)
        cb = registry.get("feed:x", FEED_BREAKER_CONFIG)
        assert cb.config is FEED_BREAKER_CONFIG

        _trip(cb)
        assert registry.get_open_circuits() == ["feed:x"]

    def test_reset_all(self, dt_clock):
        registry = CircuitBreakerRegistry(clock=dt_clock)
        _trip(registry.get("a"))
        _trip(registry.get("b"))

        registry.reset_all()

        assert registry.get_open_circuits() == []
        assert set(registry.get_all_status()) == {"a", "b"}
