"""
Execution Layer

Order types, the exchange-client interface, a simulated paper client and
live exchange clients that are disabled in this build.
"""

from .order_types import (
    Exchange,
    OrderSide,
    OrderRequest,
    OrderFill,
)
from .errors import (
    ExchangeError,
    InvalidResponseError,
    NetworkError,
    MissingCredentialsError,
    RateLimitExceededError,
    ServerError,
    InvalidConfigurationError,
    SecurityValidationError,
)
from .exchange_client_base import ExchangeClientBase
from .paper_client import PaperExchangeClient, FailureRates
from .price_cache import MarketPriceCache
from .live_client import LiveExchangeClient
from .binance_client import BinanceLiveClient
from .kraken_client import KrakenLiveClient
from .client_factory import create_exchange_client

__all__ = [
    'Exchange',
    'OrderSide',
    'OrderRequest',
    'OrderFill',
    'ExchangeError',
    'InvalidResponseError',
    'NetworkError',
    'MissingCredentialsError',
    'RateLimitExceededError',
    'ServerError',
    'InvalidConfigurationError',
    'SecurityValidationError',
    'ExchangeClientBase',
    'PaperExchangeClient',
    'FailureRates',
    'MarketPriceCache',
    'LiveExchangeClient',
    'BinanceLiveClient',
    'KrakenLiveClient',
    'create_exchange_client',
]
