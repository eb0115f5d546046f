"""
Paper Exchange Client

Fully offline simulated exchange for demo and paper trading. Fills market
orders at the last mark price and injects random transport failures so
callers exercise their error paths.

Fills can be appended to a CSV trade log and exported as a DataFrame.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union
import pandas as pd

from .exchange_client_base import ExchangeClientBase
from .errors import (
    ExchangeError,
    InvalidConfigurationError,
    InvalidResponseError,
    NetworkError,
    RateLimitExceededError,
    ServerError,
)
from .order_types import Exchange, OrderRequest, OrderFill

logger = logging.getLogger(__name__)


DEFAULT_SEED_PRICE = 50000.0

FILL_COLUMNS = [
    'timestamp', 'order_id', 'exchange', 'symbol', 'side',
    'quantity', 'price', 'fill_value',
]


@dataclass(frozen=True)
class FailureRates:
    """Probability of each injected failure per order (0.0-1.0)."""
    network: float = 0.05
    rate_limit: float = 0.02
    server: float = 0.01

    @classmethod
    def disabled(cls) -> 'FailureRates':
        return cls(network=0.0, rate_limit=0.0, server=0.0)


class PaperExchangeClient(ExchangeClientBase):
    """
    Simulated exchange client.

    The mark-price map is the only shared mutable state and is guarded by
    a single asyncio.Lock.
    """

    def __init__(
        self,
        exchange: Exchange = Exchange.BINANCE,
        failure_rates: Optional[FailureRates] = None,
        rng: Optional[random.Random] = None,
        seed_price: float = DEFAULT_SEED_PRICE,
        log_file: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize paper client.

        Args:
            exchange: Exchange whose symbol format to mimic
            failure_rates: Injected failure probabilities (None = defaults)
            rng: Random source for failure injection (None = unseeded)
            seed_price: Price reported for symbols with no mark price yet
            log_file: Optional CSV file to append fills to
        """
        self._exchange = Exchange(exchange)
        self.failure_rates = failure_rates or FailureRates()
        self.rng = rng or random.Random()
        self.seed_price = seed_price
        self.log_file = Path(log_file) if log_file else None

        self._last_prices: Dict[str, float] = {}
        self._price_lock = asyncio.Lock()
        self.fill_history: List[OrderFill] = []

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"[LOG] Paper fills will be logged to: {self.log_file}")

        logger.info(
            f"PaperExchangeClient initialized: exchange={self._exchange.value}, "
            f"failure rates network={self.failure_rates.network:.0%} "
            f"rate_limit={self.failure_rates.rate_limit:.0%} "
            f"server={self.failure_rates.server:.0%}"
        )

    @property
    def exchange(self) -> Exchange:
        return self._exchange

    def normalized(self, symbol: str) -> str:
        symbol = symbol.upper()
        if self._exchange == Exchange.BINANCE:
            return symbol.replace("-", "")  # e.g. BTCUSDT
        return symbol                        # e.g. BTC/USDT or BTCUSDT

    async def best_price(self, symbol: str) -> float:
        """Last mark price, seeding unknown symbols with seed_price."""
        key = symbol.upper()
        async with self._price_lock:
            price = self._last_prices.get(key)
            if price is None:
                price = self.seed_price
                self._last_prices[key] = price
            return price

    async def set_mark_price(self, symbol: str, price: float):
        """Update the mark price used for subsequent fills."""
        async with self._price_lock:
            self._last_prices[symbol.upper()] = price

    async def place_market_order(self, order: OrderRequest) -> OrderFill:
        """
        Simulate a market order fill.

        Raises:
            InvalidConfigurationError: If quantity is not positive or the order
                has a limit price
            NetworkError: Injected connection loss
            RateLimitExceededError: Injected throttling
            ServerError: Injected exchange failure
            InvalidResponseError: Any unexpected failure during pricing
        """
        if order.quantity <= 0:
            raise InvalidConfigurationError(
                f"Quantity must be positive, got {order.quantity}"
            )

        if not order.is_market:
            raise InvalidConfigurationError(
                f"Only market orders are simulated, got limit price {order.limit_price}"
            )

        if self.rng.random() < self.failure_rates.network:
            logger.warning(f"[PAPER] Simulated network loss for {order.symbol}")
            raise NetworkError("Network connection lost")

        if self.rng.random() < self.failure_rates.rate_limit:
            logger.warning(f"[PAPER] Simulated rate limit for {order.symbol}")
            raise RateLimitExceededError("Rate limit exceeded")

        try:
            price = await self.best_price(order.symbol)

            if self.rng.random() < self.failure_rates.server:
                logger.warning(f"[PAPER] Simulated server error for {order.symbol}")
                raise ServerError("Internal server error")

        except ExchangeError:
            raise
        except Exception as e:
            raise InvalidResponseError(f"Could not price {order.symbol}: {e}") from e

        fill = OrderFill(
            symbol=order.symbol,
            side=order.side,
            quantity=order.quantity,
            price=price,
            exchange=self._exchange,
        )
        self.fill_history.append(fill)

        logger.info(
            f"[PAPER] Filled {fill.side.value} {fill.quantity} {fill.symbol} "
            f"@ {fill.price:.2f} (order_id={fill.order_id})"
        )

        if self.log_file:
            self._log_fill(fill)

        return fill

    def get_fill_history(self) -> List[OrderFill]:
        return self.fill_history.copy()

    def fills_dataframe(self) -> pd.DataFrame:
        """All fills so far as a DataFrame (empty frame with columns if none)."""
        if not self.fill_history:
            return pd.DataFrame(columns=FILL_COLUMNS)
        return pd.DataFrame([self._fill_row(f) for f in self.fill_history], columns=FILL_COLUMNS)

    @staticmethod
    def _fill_row(fill: OrderFill) -> Dict[str, object]:
        return {
            'timestamp': fill.timestamp.isoformat(),
            'order_id': fill.order_id,
            'exchange': fill.exchange.value,
            'symbol': fill.symbol,
            'side': fill.side.value,
            'quantity': fill.quantity,
            'price': fill.price,
            'fill_value': fill.fill_value,
        }

    def _log_fill(self, fill: OrderFill):
        """Append fill to the CSV trade log."""
        try:
            df = pd.DataFrame([self._fill_row(fill)], columns=FILL_COLUMNS)
            if self.log_file.exists():
                df.to_csv(self.log_file, mode='a', header=False, index=False)
            else:
                df.to_csv(self.log_file, index=False)
        except OSError as e:
            logger.warning(f"Failed to log fill: {e}")
