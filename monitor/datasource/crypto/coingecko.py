"""
CoinGecko spot prices for a fixed set of assets.

API Documentation: https://www.coingecko.com/en/api/documentation
No API key required; one request covers every asset.
"""

from datetime import timedelta
from typing import Any

from loguru import logger
from pydantic import BaseModel

from monitor.datasource.base import BaseDataSource
from monitor.services.client import ServiceClient
from monitor.services.errors import ServiceError


class CryptoPrice(BaseModel):
    id: str
    symbol: str
    name: str
    current_price: float = 0.0
    price_change_24h: float = 0.0
    price_change_percentage_24h: float = 0.0


CRYPTO_ASSETS = [
    {"id": "bitcoin", "symbol": "BTC", "name": "Bitcoin"},
    {"id": "ethereum", "symbol": "ETH", "name": "Ethereum"},
    {"id": "solana", "symbol": "SOL", "name": "Solana"},
]


class CoinGeckoSource(BaseDataSource[CryptoPrice]):
    BASE_URL = "https://api.coingecko.com/api/v3"
    SERVICE_ID = "coingecko"

    def __init__(
        self,
        client: ServiceClient | None = None,
        assets: list[dict[str, str]] | None = None,
    ):
        super().__init__(client)
        self.assets = assets or CRYPTO_ASSETS

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    def is_configured(self) -> bool:
        return True

    async def fetch(self) -> list[CryptoPrice]:
        """Prices for every asset; zeros for anything the API did not return."""
        try:
            result = await self.client.request(
                self.SERVICE_ID,
                f"{self.BASE_URL}/simple/price",
                params={
                    "ids": ",".join(asset["id"] for asset in self.assets),
                    "vs_currencies": "usd",
                    "include_24hr_change": "true",
                },
                cache_ttl=timedelta(minutes=2),
            )
        except ServiceError as e:
            logger.warning(f"CoinGecko prices unavailable: {e}")
            return self._to_prices({})

        data = result.data if isinstance(result.data, dict) else {}
        return self._to_prices(data)

    def _to_prices(self, data: dict[str, Any]) -> list[CryptoPrice]:
        prices = []
        for asset in self.assets:
            quote = data.get(asset["id"]) or {}
            change = quote.get("usd_24h_change") or 0.0
            prices.append(
                CryptoPrice(
                    id=asset["id"],
                    symbol=asset["symbol"],
                    name=asset["name"],
                    current_price=quote.get("usd") or 0.0,
                    price_change_24h=change,
                    price_change_percentage_24h=change,
                )
            )
        return prices
