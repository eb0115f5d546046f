"""
Kraken Exchange Client (STUB)

Thin Kraken client: pair-name conversion and cached prices only. Live
trading is disabled and every order is refused.
"""

from .live_client import LiveExchangeClient
from .order_types import Exchange

# Longest first so USDT wins over USD
KNOWN_QUOTES = ("USDT", "USDC", "USD", "EUR")
QUOTE_LENGTH = 4
FALLBACK_PAIR = "XBT/USDT"


def _kraken_asset(asset: str) -> str:
    return "XBT" if asset == "BTC" else asset


class KrakenLiveClient(LiveExchangeClient):
    """Kraken live client stub."""

    @property
    def exchange(self) -> Exchange:
        return Exchange.KRAKEN

    def normalized(self, symbol: str) -> str:
        """
        Convert to Kraken websocket pair names.

        BTCUSDT -> XBT/USDT, BTCUSD -> XBT/USD, ETHEUR -> ETH/EUR. Unknown
        quotes split off the last four characters; symbols too short to
        split fall back to XBT/USDT.
        """
        raw = symbol.upper().replace("-", "").replace("/", "")
        for quote in KNOWN_QUOTES:
            base = raw[:-len(quote)]
            if raw.endswith(quote) and base:
                return f"{_kraken_asset(base)}/{quote}"
        if len(raw) >= 6:
            return f"{_kraken_asset(raw[:-QUOTE_LENGTH])}/{raw[-QUOTE_LENGTH:]}"
        return FALLBACK_PAIR
