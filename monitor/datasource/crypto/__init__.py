"""
CoinGecko data source for cryptocurrency prices.
"""

from monitor.datasource.crypto.coingecko import CoinGeckoSource, CryptoPrice

__all__ = ["CoinGeckoSource", "CryptoPrice"]
