"""
Circuit breakers for upstream feeds and market APIs.

A breaker counts consecutive failures of one upstream. Once the count hits
``failure_threshold`` it opens and ``can_request()`` answers False until
``reset_timeout`` has passed; then it lets ``half_open_max_requests`` trials
through. A trial success closes it again, a trial failure reopens it with a
fresh timeout.
A trial that never reports back, because its caller was cancelled, is handed
back with ``release_trial()``; failing that, the trial slot re-arms once
``reset_timeout`` has passed since the trial went out.

Breakers are plain synchronous objects; checking one never waits.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from loguru import logger


class CircuitState(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


@dataclass(frozen=True)
class CircuitBreakerConfig:
    failure_threshold: int = 3
    reset_timeout: timedelta = timedelta(seconds=30)
    half_open_max_requests: int = 1
    success_threshold: int = 1  # trial successes needed to close


FEED_BREAKER_CONFIG = CircuitBreakerConfig(
    failure_threshold=2, reset_timeout=timedelta(minutes=5)
)

FINNHUB_BREAKER_CONFIG = CircuitBreakerConfig(
    failure_threshold=3, reset_timeout=timedelta(seconds=60)
)


class CircuitBreaker:
    """
    Breaker for a single upstream id, e.g. ``feed:politics:Reuters``.

        if not breaker.can_request():
            return []
        try:
            body = await download()
        except httpx.HTTPError:
            breaker.record_failure()
            return []
        breaker.record_success()
    """

    def __init__(
        self,
        service_id: str,
        config: CircuitBreakerConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.service_id = service_id
        self.config = config or CircuitBreakerConfig()
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._failures = 0
        self._trials_sent = 0
        self._trial_successes = 0
        self._opened_at: datetime | None = None
        self._trial_sent_at: datetime | None = None
        self._last_failure_time: datetime | None = None

    def _transition(self, new_state: CircuitState) -> None:
        old_state = self._state
        self._state = new_state
        self._trials_sent = 0
        self._trial_successes = 0
        self._trial_sent_at = None

        if new_state == CircuitState.OPEN:
            self._opened_at = self._clock()
            logger.warning(
                f"Circuit '{self.service_id}' {old_state.value} -> OPEN "
                f"after {self._failures} failures"
            )
        elif new_state == CircuitState.CLOSED:
            self._failures = 0
            self._opened_at = None
            logger.info(f"Circuit '{self.service_id}' {old_state.value} -> CLOSED")
        else:
            logger.info(f"Circuit '{self.service_id}' OPEN -> HALF_OPEN")

    def _reopen_due(self) -> bool:
        return (
            self._opened_at is not None
            and self._clock() >= self._opened_at + self.config.reset_timeout
        )

    @property
    def state(self) -> CircuitState:
        if self._state == CircuitState.OPEN and self._reopen_due():
            self._transition(CircuitState.HALF_OPEN)
        return self._state

    def get_state(self) -> CircuitState:
        return self.state

    def can_request(self) -> bool:
        """True when a call may go out. A True in HALF_OPEN uses up a trial."""
        state = self.state
        if state == CircuitState.CLOSED:
            return True
        if state == CircuitState.OPEN:
            return False
        if self._trials_sent >= self.config.half_open_max_requests:
            if not self._trial_overdue():
                return False
            logger.warning(
                f"Circuit '{self.service_id}': trial never reported back, allowing another"
            )
            self._trials_sent = 0
        self._trials_sent += 1
        self._trial_sent_at = self._clock()
        return True

    def _trial_overdue(self) -> bool:
        return (
            self._trial_sent_at is not None
            and self._clock() >= self._trial_sent_at + self.config.reset_timeout
        )

    def release_trial(self) -> None:
        """Hand back a HALF_OPEN trial whose call ended without an outcome."""
        if self._state == CircuitState.HALF_OPEN and self._trials_sent > 0:
            self._trials_sent -= 1

    def record_success(self) -> None:
        state = self.state
        if state == CircuitState.CLOSED:
            self._failures = 0
            return
        if state == CircuitState.HALF_OPEN:
            self._trial_successes += 1
            if self._trial_successes >= self.config.success_threshold:
                self._transition(CircuitState.CLOSED)

    def record_failure(self) -> None:
        self._failures += 1
        self._last_failure_time = self._clock()

        state = self.state
        if state == CircuitState.HALF_OPEN:
            self._transition(CircuitState.OPEN)
        elif state == CircuitState.CLOSED and self._failures >= self.config.failure_threshold:
            self._transition(CircuitState.OPEN)

    def reset(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._trials_sent = 0
        self._trial_successes = 0
        self._trial_sent_at = None
        self._opened_at = None
        self._last_failure_time = None

    def get_time_until_reset(self) -> float | None:
        """Seconds left before the next trial; None unless OPEN."""
        if self._state != CircuitState.OPEN or self._opened_at is None:
            return None
        remaining = self._opened_at + self.config.reset_timeout - self._clock()
        return max(0.0, remaining.total_seconds())

    def get_status(self) -> dict[str, Any]:
        last_failure = self._last_failure_time
        return {
            "service_id": self.service_id,
            "state": self.state.value,
            "failure_count": self._failures,
            "last_failure": last_failure.isoformat() if last_failure else None,
            "time_until_reset": self.get_time_until_reset(),
        }


class CircuitBreakerRegistry:
    """Breakers keyed by upstream id; the config applies when a breaker is first created."""

    def __init__(
        self,
        default_config: CircuitBreakerConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._default_config = default_config or CircuitBreakerConfig()
        self._clock = clock
        self._breakers: dict[str, CircuitBreaker] = {}

    def get(
        self, service_id: str, config: CircuitBreakerConfig | None = None
    ) -> CircuitBreaker:
        breaker = self._breakers.get(service_id)
        if breaker is None:
            breaker = CircuitBreaker(
                service_id, config or self._default_config, clock=self._clock
            )
            self._breakers[service_id] = breaker
        return breaker

    def get_all_status(self) -> dict[str, dict[str, Any]]:
        return {sid: breaker.get_status() for sid, breaker in self._breakers.items()}

    def get_open_circuits(self) -> list[str]:
        return [
            sid
            for sid, breaker in self._breakers.items()
            if breaker.state == CircuitState.OPEN
        ]

    def reset_all(self) -> None:
        for breaker in self._breakers.values():
            breaker.reset()
        if self._breakers:
            logger.info(f"Reset {len(self._breakers)} circuit breakers")
