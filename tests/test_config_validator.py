"""
Tests for Config Validator

Tests configuration validation logic.
"""

import unittest
import tempfile
import os
import shutil
import yaml

from validation.config_validator import (
    validate_trading_mode_config,
    validate_signal_config,
    validate_all_configs,
    load_yaml_config,
    ConfigValidationError
)


class TestTradingModeValidation(unittest.TestCase):
    """Test trading_mode.yaml validation."""

    def test_valid_trading_mode_paper(self):
        """Test valid paper trading mode config."""
        config = {
            "mode": "paper",
            "allow_live_trading": False,
            "exchange": "binance"
        }

        # Should not raise
        validate_trading_mode_config(config)

    def test_valid_trading_mode_demo_kraken(self):
        validate_trading_mode_config({"mode": "demo", "exchange": "Kraken"})

    def test_valid_trading_mode_live(self):
        """Test valid live trading mode config."""
        config = {
            "mode": "live",
            "allow_live_trading": True,  # Required for live mode
            "exchange": "kraken"
        }

        validate_trading_mode_config(config)

    def test_invalid_mode(self):
        """Test invalid trading mode."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_trading_mode_config({"mode": "monitor"})

        self.assertIn("Invalid mode", str(ctx.exception))

    def test_missing_mode(self):
        """Test missing mode field."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_trading_mode_config({"allow_live_trading": False})

        self.assertIn("Missing required field", str(ctx.exception))

    def test_live_mode_without_permission(self):
        """Test live mode without allow_live_trading flag."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_trading_mode_config({"mode": "live", "allow_live_trading": False})

        self.assertIn("allow_live_trading", str(ctx.exception))

    def test_allow_live_must_be_boolean(self):
        with self.assertRaises(ConfigValidationError):
            validate_trading_mode_config({"mode": "live", "allow_live_trading": "yes"})

    def test_unknown_exchange(self):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_trading_mode_config({"mode": "paper", "exchange": "coinbase"})

        self.assertIn("Invalid exchange", str(ctx.exception))


class TestSignalConfigValidation(unittest.TestCase):
    """Test signal_fusion.yaml validation."""

    def test_valid_signal_config(self):
        config = {
            "prediction_mode": "precision",
            "min_confidence": 0.65,
            "mode_thresholds": {
                "normal": {"min_probability": 0.60, "max_uncertainty": 0.60},
                "precision": {"min_probability": 0.70, "max_uncertainty": 0.40},
            }
        }

        validate_signal_config(config)

    def test_empty_config_uses_defaults(self):
        validate_signal_config({})

    def test_invalid_prediction_mode(self):
        with self.assertRaises(ConfigValidationError):
            validate_signal_config({"prediction_mode": "aggressive"})

    def test_min_confidence_out_of_range(self):
        for value in (-0.1, 1.5):
            with self.assertRaises(ConfigValidationError):
                validate_signal_config({"min_confidence": value})

    def test_min_confidence_not_a_number(self):
        for value in ("0.6", True, None):
            with self.assertRaises(ConfigValidationError):
                validate_signal_config({"min_confidence": value})

    def test_unreachable_min_confidence_warns(self):
        with self.assertLogs("validation.config_validator", level="WARNING") as logs:
            validate_signal_config({"min_confidence": 0.95})

        self.assertTrue(any("never be actionable" in line for line in logs.output))

    def test_unknown_threshold_mode(self):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_signal_config({"mode_thresholds": {"turbo": {"min_probability": 0.5}}})

        self.assertIn("turbo", str(ctx.exception))

    def test_threshold_out_of_range(self):
        with self.assertRaises(ConfigValidationError):
            validate_signal_config({"mode_thresholds": {"normal": {"max_uncertainty": 2.0}}})

    def test_thresholds_must_be_mapping(self):
        with self.assertRaises(ConfigValidationError):
            validate_signal_config({"mode_thresholds": ["normal"]})
        with self.assertRaises(ConfigValidationError):
            validate_signal_config({"mode_thresholds": {"normal": 0.6}})


class TestConfigValidatorIntegration(unittest.TestCase):
    """Integration tests for full config validation."""

    def setUp(self):
        """Create temporary config directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_dir = os.path.join(self.temp_dir, "config")
        os.makedirs(self.config_dir)

    def tearDown(self):
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir)

    def create_yaml(self, name: str, config):
        path = os.path.join(self.config_dir, name)
        with open(path, 'w') as f:
            yaml.dump(config, f)
        return path

    def test_valid_full_config(self):
        """Test validation of complete valid configs."""
        self.create_yaml("trading_mode.yaml", {
            "mode": "paper",
            "allow_live_trading": False,
            "exchange": "binance"
        })
        self.create_yaml("signal_fusion.yaml", {
            "prediction_mode": "normal",
            "min_confidence": 0.6
        })

        configs = validate_all_configs(self.temp_dir)

        self.assertEqual(configs["trading_mode"]["mode"], "paper")
        self.assertEqual(configs["signal_fusion"]["min_confidence"], 0.6)

    def test_signal_config_optional(self):
        self.create_yaml("trading_mode.yaml", {"mode": "demo"})

        configs = validate_all_configs(self.temp_dir)

        self.assertNotIn("signal_fusion", configs)

    def test_missing_trading_mode_fails(self):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_all_configs(self.temp_dir)

        self.assertIn("Trading mode config validation failed", str(ctx.exception))

    def test_bad_signal_config_fails(self):
        self.create_yaml("trading_mode.yaml", {"mode": "paper"})
        self.create_yaml("signal_fusion.yaml", {"prediction_mode": "turbo"})

        with self.assertRaises(ConfigValidationError) as ctx:
            validate_all_configs(self.temp_dir)

        self.assertIn("Signal config validation failed", str(ctx.exception))

    def test_load_yaml_rejects_non_mapping(self):
        path = self.create_yaml("list.yaml", ["a", "b"])

        with self.assertRaises(ConfigValidationError):
            load_yaml_config(path)

    def test_repository_configs_are_valid(self):
        repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        configs = validate_all_configs(repo_root)

        self.assertIn(configs["trading_mode"]["mode"], ("demo", "paper"))
        self.assertFalse(configs["trading_mode"]["allow_live_trading"])


if __name__ == "__main__":
    unittest.main()
