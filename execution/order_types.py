"""
Order Types

Standardized order request and fill records shared by the paper client
and the (disabled) live exchange clients.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import uuid


class Exchange(str, Enum):
    """Supported exchanges."""
    BINANCE = "Binance"
    KRAKEN = "Kraken"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> 'Exchange':
        """Case-insensitive lookup ('binance', 'Kraken', ...)."""
        for exchange in cls:
            if exchange.value.lower() == str(name).strip().lower():
                return exchange
        raise ValueError(f"Unknown exchange {name!r}")


class OrderSide(Enum):
    """Order side/direction."""
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_signal(cls, signal: str) -> 'OrderSide':
        """Convert signal string (BUY/SELL/LONG/SHORT) to OrderSide."""
        signal_map = {
            'BUY': cls.BUY,
            'LONG': cls.BUY,
            'SELL': cls.SELL,
            'SHORT': cls.SELL,
        }
        try:
            return signal_map[signal.upper()]
        except KeyError:
            raise ValueError(f"Cannot convert {signal!r} to an order side")

    @classmethod
    def from_trade_side(cls, side) -> 'OrderSide':
        """Map a LONG/SHORT TradeSide to an order side. HOLD has no order side."""
        if side.value == "HOLD":
            raise ValueError("HOLD signals cannot be converted to orders")
        return cls.from_signal(side.value)


@dataclass
class OrderRequest:
    """
    Market (or limit) order request.

    Quantity is validated by the client at submission time, not here.
    """
    symbol: str
    side: OrderSide
    quantity: float

    # Prices
    limit_price: Optional[float] = None        # None = market

    # Metadata
    signal_confidence: Optional[float] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.symbol = self.symbol.upper()
        if isinstance(self.side, str):
            self.side = OrderSide.from_signal(self.side)

    @property
    def is_market(self) -> bool:
        return self.limit_price is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'symbol': self.symbol,
            'side': self.side.value,
            'quantity': self.quantity,
            'limit_price': self.limit_price,
            'signal_confidence': self.signal_confidence,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'metadata': self.metadata,
        }


@dataclass
class OrderFill:
    """Completed order execution."""
    symbol: str
    side: OrderSide
    quantity: float
    price: float
    exchange: Exchange
    order_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def fill_value(self) -> float:
        """Total value of fill (price * quantity)."""
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'order_id': self.order_id,
            'symbol': self.symbol,
            'side': self.side.value,
            'quantity': self.quantity,
            'price': self.price,
            'fill_value': self.fill_value,
            'exchange': self.exchange.value,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
