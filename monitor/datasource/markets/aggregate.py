"""
One market refresh: CoinGecko in parallel with the sequential Finnhub chain.
"""

import asyncio
import time

from loguru import logger
from pydantic import BaseModel, Field

from monitor.datasource.crypto.coingecko import CoinGeckoSource, CryptoPrice
from monitor.datasource.markets.finnhub import FinnhubSource, MarketItem


class MarketSnapshot(BaseModel):
    indices: list[MarketItem] = Field(default_factory=list)
    sectors: list[MarketItem] = Field(default_factory=list)
    commodities: list[MarketItem] = Field(default_factory=list)
    crypto: list[CryptoPrice] = Field(default_factory=list)
    updated_at: int = 0


async def fetch_all_markets(
    finnhub: FinnhubSource, coingecko: CoinGeckoSource
) -> MarketSnapshot:
    crypto_task = asyncio.create_task(coingecko.fetch())
    try:
        indices = await finnhub.fetch_indices()
        sectors = await finnhub.fetch_sectors()
        commodities = await finnhub.fetch_commodities()
    except BaseException:
        crypto_task.cancel()
        raise
    crypto = await crypto_task

    snapshot = MarketSnapshot(
        indices=indices,
        sectors=sectors,
        commodities=commodities,
        crypto=crypto,
        updated_at=int(time.time() * 1000),
    )
    quoted = sum(1 for m in indices + sectors + commodities if m.price is not None)
    logger.info(f"Markets: {quoted} quotes, {len(crypto)} crypto prices")
    return snapshot
