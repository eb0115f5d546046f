"""
Signal Fusion Configuration

Loads config/signal_fusion.yaml and merges it over the built-in defaults.
A missing file is not an error: defaults are used and a warning is logged.
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Any, Union
import yaml

logger = logging.getLogger(__name__)


DEFAULT_SIGNAL_CONFIG_PATH = "config/signal_fusion.yaml"

DEFAULT_SIGNAL_CONFIG: Dict[str, Any] = {
    'prediction_mode': 'normal',
    'min_confidence': 0.60,         # Below this a non-HOLD signal is not traded
    'mode_thresholds': {
        'normal': {
            'min_probability': 0.60,
            'max_uncertainty': 0.60,
        },
        'precision': {
            'min_probability': 0.70,
            'max_uncertainty': 0.40,
        },
    },
}


class SignalConfigError(Exception):
    """Raised when the signal config file exists but cannot be parsed."""
    pass


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_signal_config(path: Union[str, Path] = DEFAULT_SIGNAL_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load signal fusion settings.

    Args:
        path: YAML file to read

    Returns:
        Config dictionary (defaults merged with file values)

    Raises:
        SignalConfigError: If the file exists but is not a valid YAML mapping
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Signal config not found: {path}. Using defaults.")
        return copy.deepcopy(DEFAULT_SIGNAL_CONFIG)

    try:
        with open(path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SignalConfigError(f"Invalid YAML in {path}: {e}")

    if not isinstance(loaded, dict):
        raise SignalConfigError(
            f"Signal config must be a mapping, got {type(loaded).__name__}"
        )

    config = _deep_merge(DEFAULT_SIGNAL_CONFIG, loaded)
    logger.info(
        f"Loaded signal config from {path}: mode={config['prediction_mode']}, "
        f"min_confidence={config['min_confidence']}"
    )
    return config
