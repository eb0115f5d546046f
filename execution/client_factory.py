"""
Exchange Client Factory

Chooses the exchange client for the current trading mode. A live client
is only built when both live-trading gates pass; everything else gets the
paper client.
"""

import logging
import random
import yaml
from typing import Optional, Tuple

from .exchange_client_base import ExchangeClientBase
from .order_types import Exchange
from .paper_client import PaperExchangeClient, FailureRates
from .price_cache import MarketPriceCache
from .binance_client import BinanceLiveClient
from .kraken_client import KrakenLiveClient
from .live_trading_gate import (
    DEFAULT_TRADING_MODE_PATH,
    check_live_trading_gate,
    validate_no_live_keys_in_safe_mode,
    log_trading_mode_status,
)

logger = logging.getLogger(__name__)


LIVE_CLIENTS = {
    Exchange.BINANCE: BinanceLiveClient,
    Exchange.KRAKEN: KrakenLiveClient,
}


def configured_exchange(config_path: str = DEFAULT_TRADING_MODE_PATH) -> Exchange:
    """
    Exchange named by the 'exchange' key of trading_mode.yaml.

    Falls back to Binance when the file, the key or the name is unusable.
    """
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read exchange from {config_path}: {e}; using Binance")
        return Exchange.BINANCE

    name = config.get("exchange") if isinstance(config, dict) else None
    if not name:
        return Exchange.BINANCE
    try:
        return Exchange.from_name(name)
    except ValueError:
        logger.warning(f"Unknown exchange '{name}' in {config_path}; using Binance")
        return Exchange.BINANCE


def create_exchange_client(
    exchange: Optional[Exchange] = None,
    config_path: str = DEFAULT_TRADING_MODE_PATH,
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    price_cache: Optional[MarketPriceCache] = None,
    failure_rates: Optional[FailureRates] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[ExchangeClientBase, str]:
    """
    Build the client allowed by the live-trading gate.

    Args:
        exchange: Target exchange (None = the one named in config_path)
        config_path: Path to trading_mode.yaml
        api_key: API key (only used by live clients)
        api_secret: API secret (only used by live clients)
        price_cache: Price source for live clients
        failure_rates: Injected failure rates for the paper client
        rng: Random source for the paper client

    Returns:
        Tuple of (client, mode)

    Raises:
        LiveTradingGateError: If API keys are supplied outside live mode
    """
    exchange = Exchange(exchange) if exchange is not None else configured_exchange(config_path)
    is_live, mode, reason = check_live_trading_gate(config_path)
    log_trading_mode_status(is_live, mode, reason)

    if is_live:
        client_cls = LIVE_CLIENTS[exchange]
        return client_cls(
            api_key=api_key or "",
            api_secret=api_secret or "",
            price_cache=price_cache,
            trading_mode=mode,
        ), mode

    validate_no_live_keys_in_safe_mode(api_key, api_secret, mode)
    logger.info(f"Using paper client for {exchange.value} ({mode} mode)")

    return PaperExchangeClient(
        exchange=exchange,
        failure_rates=failure_rates,
        rng=rng,
    ), mode
