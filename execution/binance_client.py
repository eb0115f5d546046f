"""
Binance Exchange Client (STUB)

Placeholder live client. Do not enable until keys and legal gating are
in place; all orders are refused.
"""

from .live_client import LiveExchangeClient
from .order_types import Exchange


class BinanceLiveClient(LiveExchangeClient):
    """Binance live client stub."""

    @property
    def exchange(self) -> Exchange:
        return Exchange.BINANCE

    def normalized(self, symbol: str) -> str:
        # BTC-USDT -> BTCUSDT
        return symbol.upper().replace("-", "")
