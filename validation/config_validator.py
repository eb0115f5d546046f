"""
Configuration Validator

Validates configuration files for consistency and safety.
Ensures configs are valid before the signal runner starts.
"""

import os
import sys
import yaml
import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)


VALID_TRADING_MODES = ["demo", "paper", "live"]
VALID_EXCHANGES = ["binance", "kraken"]
VALID_PREDICTION_MODES = ["normal", "precision"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def _check_unit_interval(name: str, value: Any) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ConfigValidationError(
            f"'{name}' must be a number, got {type(value).__name__}"
        )
    if not 0.0 <= value <= 1.0:
        raise ConfigValidationError(f"'{name}' must be within [0, 1], got {value}")


def validate_trading_mode_config(cfg: Dict[str, Any]) -> None:
    """
    Validate trading_mode.yaml configuration.

    Args:
        cfg: Parsed trading mode config dictionary

    Raises:
        ConfigValidationError: If config is invalid
    """
    mode = cfg.get("mode")

    if not mode:
        raise ConfigValidationError("Missing required field: 'mode'")

    if mode not in VALID_TRADING_MODES:
        raise ConfigValidationError(
            f"Invalid mode '{mode}'. Must be one of: {', '.join(VALID_TRADING_MODES)}"
        )

    allow_live = cfg.get("allow_live_trading", False)
    if not isinstance(allow_live, bool):
        raise ConfigValidationError(
            f"allow_live_trading must be boolean, got {type(allow_live).__name__}"
        )

    # Live mode requires explicit permission
    if mode == "live" and not allow_live:
        raise ConfigValidationError(
            "Live trading mode requires 'allow_live_trading: true'. "
            "This is a safety gate to prevent accidental live trading."
        )

    exchange = cfg.get("exchange", "binance")
    if str(exchange).lower() not in VALID_EXCHANGES:
        raise ConfigValidationError(
            f"Invalid exchange '{exchange}'. Must be one of: {', '.join(VALID_EXCHANGES)}"
        )

    logger.info(f"[OK] Trading mode config validated: mode='{mode}', exchange='{exchange}'")


def validate_signal_config(cfg: Dict[str, Any]) -> None:
    """
    Validate signal_fusion.yaml configuration.

    Args:
        cfg: Parsed signal config dictionary

    Raises:
        ConfigValidationError: If config is invalid
    """
    prediction_mode = cfg.get("prediction_mode", "normal")
    if prediction_mode not in VALID_PREDICTION_MODES:
        raise ConfigValidationError(
            f"Invalid prediction_mode '{prediction_mode}'. "
            f"Must be one of: {', '.join(VALID_PREDICTION_MODES)}"
        )

    if "min_confidence" in cfg:
        min_confidence = cfg["min_confidence"]
        _check_unit_interval("min_confidence", min_confidence)
        # Meta-confidence never leaves [0.50, 0.90]
        if min_confidence > 0.90:
            logger.warning(
                f"min_confidence {min_confidence:.2f} is above 0.90; signals will never be actionable."
            )
        elif min_confidence <= 0.50:
            logger.warning(
                f"min_confidence {min_confidence:.2f} is at or below 0.50; every directional signal is actionable."
            )

    thresholds = cfg.get("mode_thresholds", {}) or {}
    if not isinstance(thresholds, dict):
        raise ConfigValidationError("mode_thresholds must be a mapping")

    for mode_name, limits in thresholds.items():
        if mode_name not in VALID_PREDICTION_MODES:
            raise ConfigValidationError(f"Unknown mode in mode_thresholds: '{mode_name}'")
        if not isinstance(limits, dict):
            raise ConfigValidationError(f"mode_thresholds.{mode_name} must be a mapping")
        for key in ("min_probability", "max_uncertainty"):
            if key in limits:
                _check_unit_interval(f"mode_thresholds.{mode_name}.{key}", limits[key])

    logger.info(f"[OK] Signal config validated: prediction_mode='{prediction_mode}'")


def load_yaml_config(path: str) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed config dictionary

    Raises:
        ConfigValidationError: If file cannot be loaded
    """
    config_file = Path(path)

    if not config_file.exists():
        raise ConfigValidationError(f"Config file not found: {path}")

    try:
        with open(config_file, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigValidationError(f"Error loading {path}: {e}")

    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config {path} must be a mapping")
    return loaded


def validate_all_configs(base_path: str = ".") -> Dict[str, Dict[str, Any]]:
    """
    Validate all configuration files.

    Loads and validates:
    - config/trading_mode.yaml
    - config/signal_fusion.yaml (optional)

    Args:
        base_path: Base directory containing config/ folder

    Returns:
        Dictionary of all loaded configs

    Raises:
        ConfigValidationError: If any validation fails
    """
    logger.info("=" * 60)
    logger.info("Starting configuration validation...")
    logger.info("=" * 60)

    configs = {}

    try:
        trading_mode_path = os.path.join(base_path, "config", "trading_mode.yaml")
        configs["trading_mode"] = load_yaml_config(trading_mode_path)
        validate_trading_mode_config(configs["trading_mode"])
    except ConfigValidationError as e:
        raise ConfigValidationError(f"Trading mode config validation failed: {e}")

    signal_path = os.path.join(base_path, "config", "signal_fusion.yaml")
    if os.path.exists(signal_path):
        try:
            configs["signal_fusion"] = load_yaml_config(signal_path)
            validate_signal_config(configs["signal_fusion"])
        except ConfigValidationError as e:
            raise ConfigValidationError(f"Signal config validation failed: {e}")
    else:
        logger.warning(f"{signal_path} not found; signal defaults will be used")

    logger.info("=" * 60)
    logger.info("[OK] ALL CONFIGURATIONS VALIDATED SUCCESSFULLY")
    logger.info("=" * 60)

    return configs


if __name__ == "__main__":
    """
    Standalone config validation script.

    Usage:
        python -m validation.config_validator
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    try:
        configs = validate_all_configs()
        print("\nAll configurations are valid and consistent.")
        print(f"\nCurrent trading mode: {configs['trading_mode']['mode']}")
        if "signal_fusion" in configs:
            print(f"Prediction mode: {configs['signal_fusion'].get('prediction_mode', 'normal')}")
    except ConfigValidationError as e:
        print(f"\nConfiguration validation failed:\n{e}")
        sys.exit(1)
