"""
Live Trading Safety Gate

Two-key gate system to prevent accidental live trading with real money.

REQUIREMENTS FOR LIVE TRADING:
1. config/trading_mode.yaml must have mode: "live" and allow_live_trading: true
2. Environment variable LIVE_TRADING_ENABLED must equal "true"

Both conditions must be satisfied. Otherwise, the system forces paper mode.
Even with both gates open, the live clients in this build refuse orders.
"""

import os
import logging
from typing import Optional, Tuple
import yaml

logger = logging.getLogger(__name__)


DEFAULT_TRADING_MODE_PATH = "config/trading_mode.yaml"
SAFE_MODES = ("demo", "paper")


class LiveTradingGateError(Exception):
    """Raised when live trading gate checks fail."""
    pass


def live_trading_env_enabled() -> bool:
    return os.getenv("LIVE_TRADING_ENABLED", "false").lower() in ("true", "1", "yes")


def check_live_trading_gate(config_path: str = DEFAULT_TRADING_MODE_PATH) -> Tuple[bool, str, str]:
    """
    Check if live trading is properly unlocked.

    Returns:
        Tuple of (is_live_enabled, actual_mode, reason)
        - is_live_enabled: True if both gates pass
        - actual_mode: The mode that should be used ("demo", "paper", or "live")
        - reason: Human-readable explanation
    """
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return False, "paper", f"Config file not found: {config_path}"
    except (OSError, yaml.YAMLError) as e:
        return False, "paper", f"Failed to load config: {e}"

    if not isinstance(config, dict):
        return False, "paper", f"Config {config_path} is not a mapping"

    mode = config.get("mode", "paper")
    allow_live = config.get("allow_live_trading", False)

    if mode == "live":
        if not allow_live:
            return False, "paper", (
                "Live trading blocked: config mode='live' but allow_live_trading=false. "
                "Set allow_live_trading: true in config/trading_mode.yaml to enable."
            )
        if not live_trading_env_enabled():
            return False, "paper", (
                "Live trading blocked: config mode='live' and allow_live_trading=true, "
                "but environment variable LIVE_TRADING_ENABLED is not 'true'."
            )
        return True, "live", "Live trading enabled (both gates passed)"

    elif mode == "demo":
        return False, "demo", "Demo mode active (simulated orders, demo balances)"

    elif mode == "paper":
        return False, "paper", "Paper trading mode active (simulated orders)"

    else:
        return False, "paper", f"Unknown mode '{mode}', defaulting to paper mode"


def validate_no_live_keys_in_safe_mode(
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    mode: str = "paper"
) -> None:
    """
    Validate that live API keys are not present when running in safe modes.

    Raises:
        LiveTradingGateError: If keys are detected in demo/paper mode
    """
    has_key = bool(api_key and len(api_key.strip()) > 10)
    has_secret = bool(api_secret and len(api_secret.strip()) > 10)

    if (has_key or has_secret) and mode in SAFE_MODES:
        raise LiveTradingGateError(
            f"CRITICAL SAFETY ERROR: Live API keys detected in {mode.upper()} mode. "
            f"Remove API keys from environment/config files, or set mode: 'live', "
            f"allow_live_trading: true and LIVE_TRADING_ENABLED=true."
        )


def log_trading_mode_status(is_live: bool, mode: str, reason: str) -> None:
    """Log trading mode status with clear visual separation."""
    if is_live and mode == "live":
        logger.critical("=" * 70)
        logger.critical("LIVE TRADING MODE - REAL MONEY AT RISK")
        logger.critical("=" * 70)
        logger.critical(f"Reason: {reason}")
    else:
        logger.info("=" * 70)
        logger.info(f"{mode.upper()} MODE - Simulated Orders")
        logger.info("=" * 70)
        logger.info(f"Reason: {reason}")
