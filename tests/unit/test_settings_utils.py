"""Unit tests for monitor.settings and monitor.utils.

Covers:
- Settings defaults and environment-name aliases
- safe_func_wrapper on plain and coroutine functions
"""

from __future__ import annotations

import inspect

import pytest

from monitor.settings import Settings
from monitor.utils import safe_func_wrapper


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.feed_concurrency == 5
        assert settings.feed_breaker_failures == 2
        assert settings.feed_breaker_reset_seconds == 300
        assert settings.feed_health_max_failures == 5
        assert settings.finnhub_api_key == ""
        assert settings.database_url.startswith("sqlite+aiosqlite://")

    def test_env_aliases(self):
        settings = Settings.model_validate(
            {"FEED_CONCURRENCY": "9", "FINNHUB_API_KEY": "abc", "MONITOR_DEBUG": "true"}
        )
        assert settings.feed_concurrency == 9
        assert settings.finnhub_api_key == "abc"
        assert settings.debug is True

    def test_field_names_accepted(self):
        assert Settings(category_delay_ms=0).category_delay_ms == 0

    def test_unrelated_env_ignored(self):
        settings = Settings.model_validate({"PATH": "/usr/bin", "HOME": "/root"})
        assert settings.news_max_age_days == 7


class TestSafeFuncWrapper:
    def test_sync_passthrough(self):
        @safe_func_wrapper
        def add(a, b=2):
            return a + b

        assert add(1) == 3
        assert add.__name__ == "add"

    def test_sync_reraises(self):
        @safe_func_wrapper
        def explode():
            raise ValueError("bad input")

        with pytest.raises(ValueError, match="bad input"):
            explode()

    async def test_async_passthrough(self):
        @safe_func_wrapper
        async def fetch(x):
            return x * 2

        assert inspect.iscoroutinefunction(fetch)
        assert await fetch(21) == 42

    async def test_async_reraises(self):
        @safe_func_wrapper
        async def explode():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            await explode()

    def test_methods_wrapped(self):
        class Job:
            def __init__(self):
                self.runs = 0

            @safe_func_wrapper
            def run(self, times=1):
                self.runs += times
                return self.runs

        job = Job()
        assert job.run(times=3) == 3
