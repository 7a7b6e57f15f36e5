import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Feeds
    feeds_config_path: str = Field(
        default="monitor/datasource/rss/feeds.yaml", alias="FEEDS_CONFIG_PATH"
    )
    news_refresh_interval_minutes: int = Field(default=5, alias="NEWS_REFRESH_INTERVAL")
    feed_timeout_seconds: float = Field(default=8.0, alias="FEED_TIMEOUT")
    feed_concurrency: int = Field(default=5, alias="FEED_CONCURRENCY")
    category_delay_ms: int = Field(default=500, alias="CATEGORY_DELAY_MS")
    news_max_age_days: int = Field(default=7, alias="NEWS_MAX_AGE_DAYS")

    # Circuit breakers
    feed_breaker_failures: int = Field(default=2, alias="FEED_BREAKER_FAILURES")
    feed_breaker_reset_seconds: int = Field(default=300, alias="FEED_BREAKER_RESET")
    finnhub_breaker_failures: int = Field(default=3, alias="FINNHUB_BREAKER_FAILURES")
    finnhub_breaker_reset_seconds: int = Field(default=60, alias="FINNHUB_BREAKER_RESET")

    # Feed health
    feed_health_max_failures: int = Field(default=5, alias="FEED_HEALTH_MAX_FAILURES")
    feed_health_retry_minutes: int = Field(default=60, alias="FEED_HEALTH_RETRY_MINUTES")

    # Markets
    finnhub_api_key: str = Field(default="", alias="FINNHUB_API_KEY")
    finnhub_timeout_seconds: float = Field(default=10.0, alias="FINNHUB_TIMEOUT")
    finnhub_stagger_ms: int = Field(default=100, alias="FINNHUB_STAGGER_MS")
    market_refresh_interval_minutes: int = Field(
        default=2, alias="MARKET_REFRESH_INTERVAL"
    )

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./monitor.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    history_store_path: str = Field(
        default="./data/history.json", alias="HISTORY_STORE_PATH"
    )

    # Analysis window fed to the engines after each refresh
    analysis_window_hours: int = Field(default=24, alias="ANALYSIS_WINDOW_HOURS")

    debug: bool = Field(default=False, alias="MONITOR_DEBUG")


def load_settings() -> Settings:
    return Settings.model_validate(dict(os.environ))


global_settings = load_settings()
