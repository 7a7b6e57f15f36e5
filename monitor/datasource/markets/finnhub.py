"""
Finnhub quotes for indices, sectors, and commodities.

API Documentation: https://finnhub.io/docs/api
Free tier: 60 calls/minute, so quotes are fetched one at a time with a
short stagger and behind a dedicated circuit breaker.
"""

import asyncio
from datetime import timedelta
from typing import Any

from loguru import logger
from pydantic import BaseModel

from monitor.datasource.base import BaseDataSource
from monitor.services.circuit_breaker import FINNHUB_BREAKER_CONFIG, CircuitBreakerConfig
from monitor.services.client import ServiceClient, ServiceConfig
from monitor.services.errors import ServiceError
from monitor.settings import global_settings


class MarketItem(BaseModel):
    """Index, sector, or commodity quote. Prices are None when unavailable."""

    symbol: str
    name: str
    price: float | None = None
    change: float | None = None
    change_percent: float | None = None
    type: str  # 'index' | 'sector' | 'commodity'


# Free tier has no direct index quotes, so indices and commodities use ETF proxies
INDICES = [
    {"symbol": "^DJI", "proxy": "DIA", "name": "Dow Jones"},
    {"symbol": "^GSPC", "proxy": "SPY", "name": "S&P 500"},
    {"symbol": "^IXIC", "proxy": "QQQ", "name": "NASDAQ"},
    {"symbol": "^RUT", "proxy": "IWM", "name": "Russell 2000"},
]

SECTORS = [
    {"symbol": "XLK", "name": "Technology"},
    {"symbol": "XLF", "name": "Financials"},
    {"symbol": "XLV", "name": "Healthcare"},
    {"symbol": "XLE", "name": "Energy"},
    {"symbol": "XLI", "name": "Industrials"},
    {"symbol": "XLY", "name": "Consumer Discretionary"},
    {"symbol": "XLP", "name": "Consumer Staples"},
    {"symbol": "XLU", "name": "Utilities"},
    {"symbol": "XLRE", "name": "Real Estate"},
    {"symbol": "XLB", "name": "Materials"},
    {"symbol": "XLC", "name": "Communication Services"},
]

COMMODITIES = [
    {"symbol": "^VIX", "proxy": "VIXY", "name": "VIX"},
    {"symbol": "GC=F", "proxy": "GLD", "name": "Gold"},
    {"symbol": "CL=F", "proxy": "USO", "name": "Crude Oil"},
    {"symbol": "NG=F", "proxy": "UNG", "name": "Natural Gas"},
    {"symbol": "SI=F", "proxy": "SLV", "name": "Silver"},
    {"symbol": "HG=F", "proxy": "CPER", "name": "Copper"},
]


class FinnhubSource(BaseDataSource[MarketItem]):
    BASE_URL = "https://finnhub.io/api/v1"
    SERVICE_ID = "finnhub"

    def __init__(
        self,
        api_key: str | None = None,
        client: ServiceClient | None = None,
        stagger_ms: int | None = None,
        breaker_config: CircuitBreakerConfig = FINNHUB_BREAKER_CONFIG,
    ):
        super().__init__(client)
        self.api_key = api_key if api_key is not None else global_settings.finnhub_api_key
        self.stagger_ms = (
            stagger_ms if stagger_ms is not None else global_settings.finnhub_stagger_ms
        )
        self.client.register_service(
            ServiceConfig(
                service_id=self.SERVICE_ID,
                timeout=global_settings.finnhub_timeout_seconds,
                cache_ttl=timedelta(minutes=1),
                circuit_breaker_config=breaker_config,
            )
        )

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch(self) -> list[MarketItem]:
        indices = await self.fetch_indices()
        commodities = await self.fetch_commodities()
        return indices + commodities

    async def _fetch_quote(self, symbol: str) -> dict[str, Any] | None:
        try:
            result = await self.client.request(
                self.SERVICE_ID,
                f"{self.BASE_URL}/quote",
                params={"symbol": symbol, "token": self.api_key},
            )
        except ServiceError as e:
            logger.warning(f"Finnhub quote {symbol} unavailable: {e}")
            return None

        data = result.data
        # Unknown symbols come back as all zeros
        if not isinstance(data, dict) or (data.get("c", 0) == 0 and data.get("pc", 0) == 0):
            return None
        return data

    async def _fetch_sequential(
        self, entries: list[dict[str, str]], item_type: str
    ) -> list[MarketItem]:
        if not self.is_configured():
            return [
                MarketItem(symbol=e["symbol"], name=e["name"], type=item_type)
                for e in entries
            ]

        results = []
        for i, entry in enumerate(entries):
            if i:
                await asyncio.sleep(self.stagger_ms / 1000)
            quote = await self._fetch_quote(entry.get("proxy", entry["symbol"]))
            results.append(
                MarketItem(
                    symbol=entry["symbol"],
                    name=entry["name"],
                    price=quote.get("c") if quote else None,
                    change=quote.get("d") if quote else None,
                    change_percent=quote.get("dp") if quote else None,
                    type=item_type,
                )
            )
        return results

    async def fetch_indices(self) -> list[MarketItem]:
        return await self._fetch_sequential(INDICES, "index")

    async def fetch_sectors(self) -> list[MarketItem]:
        return await self._fetch_sequential(SECTORS, "sector")

    async def fetch_commodities(self) -> list[MarketItem]:
        return await self._fetch_sequential(COMMODITIES, "commodity")
