"""
Market data: Finnhub quotes plus the combined market refresh.
"""

from monitor.datasource.markets.finnhub import FinnhubSource, MarketItem
from monitor.datasource.markets.aggregate import MarketSnapshot, fetch_all_markets

__all__ = ["FinnhubSource", "MarketItem", "MarketSnapshot", "fetch_all_markets"]
