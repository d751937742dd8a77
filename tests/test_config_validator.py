"""
Tests for Config Validator

Tests risk configuration validation logic.
"""

import unittest
import tempfile
import os
import yaml
import json
from pathlib import Path

from validation.config_validator import (
    validate_risk_config,
    load_risk_config,
    load_json_config,
    load_yaml_config,
    find_risk_config,
    validate_all_configs,
    ConfigValidationError
)

VALID_CONFIG = {
    "account_size": 1000.0,
    "risk_percent": 2.0,
    "max_margin_percent": 75.0,
    "max_leverage": 125
}


class TestConfigValidator(unittest.TestCase):
    """Test configuration validation."""

    def test_valid_risk_config(self):
        """Test valid risk config."""
        # Should not raise
        validate_risk_config(dict(VALID_CONFIG))

    def test_missing_field(self):
        """Test missing required field."""
        config = dict(VALID_CONFIG)
        del config["max_leverage"]

        with self.assertRaises(ConfigValidationError) as ctx:
            validate_risk_config(config)

        self.assertIn("max_leverage", str(ctx.exception))

    def test_non_numeric_field(self):
        """Test string where a number is required."""
        config = dict(VALID_CONFIG, account_size="1000")

        with self.assertRaises(ConfigValidationError) as ctx:
            validate_risk_config(config)

        self.assertIn("must be a number", str(ctx.exception))

    def test_bool_is_not_a_number(self):
        config = dict(VALID_CONFIG, max_leverage=True)

        with self.assertRaises(ConfigValidationError):
            validate_risk_config(config)

    def test_out_of_range_values(self):
        """Test each range check."""
        bad_values = [
            ("account_size", 0),
            ("risk_percent", 0),
            ("risk_percent", 120),
            ("max_margin_percent", -5),
            ("max_margin_percent", 150),
            ("max_leverage", 0),
            ("max_leverage", 2.5),
        ]

        for field, value in bad_values:
            with self.subTest(field=field, value=value):
                with self.assertRaises(ConfigValidationError):
                    validate_risk_config(dict(VALID_CONFIG, **{field: value}))

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigValidationError):
            validate_risk_config(["account_size", 1000])

    def test_high_risk_warns(self):
        """High risk and leverage are allowed but logged."""
        config = dict(VALID_CONFIG, risk_percent=10.0)

        with self.assertLogs("validation.config_validator", level="WARNING") as logs:
            validate_risk_config(config)

        output = "\n".join(logs.output)
        self.assertIn("risk_percent is high", output)
        self.assertIn("max_leverage is high", output)


class TestConfigLoading(unittest.TestCase):
    """Test loading config files from disk."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.base = Path(self.temp_dir.name)
        (self.base / "config").mkdir()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load_json(self):
        path = self.base / "config" / "risk.json"
        path.write_text(json.dumps(VALID_CONFIG))

        self.assertEqual(load_risk_config(str(path)), VALID_CONFIG)

    def test_load_yaml(self):
        path = self.base / "config" / "risk.yaml"
        with open(path, "w") as f:
            yaml.dump(VALID_CONFIG, f)

        self.assertEqual(load_risk_config(str(path))["max_leverage"], 125)

    def test_invalid_json(self):
        path = self.base / "config" / "risk.json"
        path.write_text("{broken")

        with self.assertRaises(ConfigValidationError) as ctx:
            load_json_config(str(path))

        self.assertIn("Invalid JSON", str(ctx.exception))

    def test_invalid_yaml(self):
        path = self.base / "config" / "risk.yaml"
        path.write_text("account_size: [unclosed")

        with self.assertRaises(ConfigValidationError) as ctx:
            load_yaml_config(str(path))

        self.assertIn("Invalid YAML", str(ctx.exception))

    def test_missing_file(self):
        with self.assertRaises(ConfigValidationError):
            load_risk_config(os.path.join(self.temp_dir.name, "nope.json"))

    def test_find_prefers_json(self):
        (self.base / "config" / "risk.yaml").write_text("account_size: 1\n")
        (self.base / "config" / "risk.json").write_text("{}")

        self.assertEqual(find_risk_config(self.temp_dir.name).name, "risk.json")

    def test_find_none(self):
        self.assertIsNone(find_risk_config(self.temp_dir.name))

    def test_validate_all_configs(self):
        (self.base / "config" / "risk.yaml").write_text(yaml.dump(VALID_CONFIG))

        configs = validate_all_configs(self.temp_dir.name)

        self.assertEqual(configs["risk"]["risk_percent"], 2.0)

    def test_validate_all_configs_without_file(self):
        with self.assertRaises(ConfigValidationError):
            validate_all_configs(self.temp_dir.name)


if __name__ == '__main__':
    unittest.main()
