"""
Configuration validation.

Checks config/trading_mode.yaml and config/signal_fusion.yaml before any
runner starts.
"""

from .config_validator import (
    ConfigValidationError,
    validate_trading_mode_config,
    validate_signal_config,
    validate_all_configs,
    load_yaml_config,
)

__all__ = [
    'ConfigValidationError',
    'validate_trading_mode_config',
    'validate_signal_config',
    'validate_all_configs',
    'load_yaml_config',
]
