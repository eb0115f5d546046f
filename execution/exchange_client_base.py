"""
Exchange Client Base

Abstract base class for exchange integrations. Implemented by the paper
client and by the live clients (which currently refuse all orders).
"""

from abc import ABC, abstractmethod

from .order_types import Exchange, OrderRequest, OrderFill


class ExchangeClientBase(ABC):
    """
    Abstract base class for exchange clients.

    Defines the interface that all exchange implementations must follow.
    """

    @property
    @abstractmethod
    def exchange(self) -> Exchange:
        """Exchange this client talks to."""
        pass

    @abstractmethod
    def normalized(self, symbol: str) -> str:
        """
        Convert a symbol to the exchange's native pair name.

        Args:
            symbol: Trading pair symbol (e.g., "BTCUSDT", "BTC-USDT")

        Returns:
            Exchange-specific pair name
        """
        pass

    @abstractmethod
    async def best_price(self, symbol: str) -> float:
        """
        Get current best price for a symbol.

        Args:
            symbol: Trading pair symbol

        Returns:
            Current price
        """
        pass

    @abstractmethod
    async def place_market_order(self, order: OrderRequest) -> OrderFill:
        """
        Submit a market order.

        Args:
            order: OrderRequest to submit

        Returns:
            OrderFill on success

        Raises:
            ExchangeError: On any failure
        """
        pass

    @property
    def exchange_name(self) -> str:
        return self.exchange.display_name
