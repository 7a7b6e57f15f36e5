"""
Errors raised by the resilience layer.

Data sources catch these and degrade to empty results; they never reach the
analysis engines.
"""


class ServiceError(Exception):
    """Base class; carries the upstream id when one is known."""

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        super().__init__(message)


class CircuitOpenError(ServiceError):
    """Raised instead of calling an upstream whose breaker is open."""

    def __init__(self, service_id: str, reset_after_seconds: float):
        self.reset_after_seconds = reset_after_seconds
        super().__init__(
            f"{service_id}: circuit open, next trial in {reset_after_seconds:.1f}s",
            service_id=service_id,
        )


class RequestTimeoutError(ServiceError):
    def __init__(self, service_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"{service_id}: no response within {timeout}s", service_id=service_id
        )


class RateLimitError(ServiceError):
    """Upstream answered 429."""

    def __init__(self, service_id: str, retry_after: float | None = None):
        self.retry_after = retry_after
        message = f"{service_id}: rate limited"
        if retry_after:
            message = f"{message}, retry after {retry_after}s"
        super().__init__(message, service_id=service_id)
