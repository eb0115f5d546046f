"""
Market Price Cache

Last-traded prices fed by the market data stream and read by the live
exchange clients.
"""

import asyncio
from typing import Dict, Optional


class MarketPriceCache:
    """Async-safe cache of the latest price overall and per symbol."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._last_price = 0.0
        self._prices: Dict[str, float] = {}

    async def update(self, price: float, symbol: Optional[str] = None):
        async with self._lock:
            self._last_price = price
            if symbol:
                self._prices[symbol.upper()] = price

    async def last_price(self, symbol: Optional[str] = None) -> float:
        """Latest price for symbol, falling back to the latest price seen (0.0 if none)."""
        async with self._lock:
            if symbol and symbol.upper() in self._prices:
                return self._prices[symbol.upper()]
            return self._last_price
