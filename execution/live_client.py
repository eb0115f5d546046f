"""
Live Exchange Client (DISABLED)

Shared behaviour of the live exchange clients. Credentials are checked,
prices come from the MarketPriceCache, and every order is refused:
live trading is disabled in this build.
"""

import logging
from typing import Optional

from .exchange_client_base import ExchangeClientBase
from .errors import MissingCredentialsError, ServerError
from .order_types import OrderRequest, OrderFill
from .price_cache import MarketPriceCache
from .live_trading_gate import validate_no_live_keys_in_safe_mode, LiveTradingGateError

logger = logging.getLogger(__name__)


LIVE_TRADING_DISABLED_MESSAGE = (
    "Live trading is disabled in this build for safety. Please use demo mode."
)


class LiveExchangeClient(ExchangeClientBase):
    """
    Base for live exchange clients.

    IMPORTANT: No network calls are made and no order is ever submitted.
    """

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        price_cache: Optional[MarketPriceCache] = None,
        trading_mode: str = "live",
    ):
        """
        Initialize live client.

        Args:
            api_key: Exchange API key
            api_secret: Exchange API secret
            price_cache: Source of last prices (None = private empty cache)
            trading_mode: Current trading mode for safety validation

        Raises:
            LiveTradingGateError: If keys are supplied in demo/paper mode
        """
        try:
            validate_no_live_keys_in_safe_mode(api_key, api_secret, trading_mode)
        except LiveTradingGateError as e:
            logger.critical(str(e))
            raise

        self.api_key = api_key or ""
        self.api_secret = api_secret or ""
        self.price_cache = price_cache or MarketPriceCache()
        self.trading_mode = trading_mode

        logger.warning(
            f"{type(self).__name__} initialized. Live order submission is DISABLED."
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key.strip() and self.api_secret.strip())

    async def best_price(self, symbol: str) -> float:
        return await self.price_cache.last_price(symbol)

    async def place_market_order(self, order: OrderRequest) -> OrderFill:
        """
        Refuse the order.

        Raises:
            MissingCredentialsError: If API key or secret is blank
            ServerError: Always otherwise; live trading is disabled
        """
        if not self.has_credentials:
            raise MissingCredentialsError(
                f"{self.exchange_name} API key and secret are required"
            )

        logger.warning(
            f"[LIVE-DISABLED] Refused {order.side.value} {order.quantity} "
            f"{self.normalized(order.symbol)} on {self.exchange_name}"
        )
        raise ServerError(LIVE_TRADING_DISABLED_MESSAGE)
