"""
Configuration Validator

Validates the risk configuration file before the calculator uses it.
Supports config/risk.json and config/risk.yaml.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_CANDIDATES = ("risk.json", "risk.yaml", "risk.yml")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def _require_number(cfg: Dict[str, Any], field: str) -> float:
    if field not in cfg:
        raise ConfigValidationError(f"Missing required risk config field: '{field}'")

    value = cfg[field]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(
            f"Risk config field '{field}' must be a number, got {type(value).__name__}"
        )
    return value


def validate_risk_config(cfg: Dict[str, Any]) -> None:
    """
    Validate risk configuration.

    Args:
        cfg: Parsed risk config dictionary

    Raises:
        ConfigValidationError: If config is invalid
    """
    if not isinstance(cfg, dict):
        raise ConfigValidationError(
            f"Risk config must be a mapping, got {type(cfg).__name__}"
        )

    account_size = _require_number(cfg, "account_size")
    risk_percent = _require_number(cfg, "risk_percent")
    max_margin_percent = _require_number(cfg, "max_margin_percent")
    max_leverage = _require_number(cfg, "max_leverage")

    if account_size <= 0:
        raise ConfigValidationError(f"account_size must be positive, got {account_size}")

    if risk_percent <= 0 or risk_percent > 100:
        raise ConfigValidationError(
            f"risk_percent must be between 0 and 100, got {risk_percent}"
        )

    if max_margin_percent <= 0 or max_margin_percent > 100:
        raise ConfigValidationError(
            f"max_margin_percent must be between 0 and 100, got {max_margin_percent}"
        )

    if isinstance(max_leverage, float) and not max_leverage.is_integer():
        raise ConfigValidationError(
            f"max_leverage must be a whole number, got {max_leverage}"
        )
    if max_leverage < 1:
        raise ConfigValidationError(f"max_leverage must be >= 1, got {max_leverage}")

    # Validate reasonable values
    if risk_percent > 5:
        logger.warning(
            f"risk_percent is high ({risk_percent:.1f}%). "
            "Consider using 1-2% for safer risk management."
        )

    if max_leverage > 20:
        logger.warning(
            f"max_leverage is high ({max_leverage}x). "
            "Small adverse moves will consume the margin quickly."
        )

    logger.info("[OK] Risk config validated")


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
        with open(config_file, 'r', encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigValidationError(f"Error loading {path}: {e}")


def load_json_config(path: str) -> Dict[str, Any]:
    """
    Load JSON configuration file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed config dictionary

    Raises:
        ConfigValidationError: If file cannot be loaded
    """
    config_file = Path(path)

    if not config_file.exists():
        raise ConfigValidationError(f"Config file not found: {path}")

    try:
        with open(config_file, 'r', encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise ConfigValidationError(f"Error loading {path}: {e}")


def find_risk_config(base_path: str = ".") -> Optional[Path]:
    """Return the first of config/risk.json, risk.yaml, risk.yml that exists."""
    for name in DEFAULT_CONFIG_CANDIDATES:
        candidate = Path(base_path) / "config" / name
        if candidate.exists():
            return candidate
    return None


def load_risk_config(path: str) -> Dict[str, Any]:
    """
    Load and validate a risk config file, choosing the parser by extension.

    Raises:
        ConfigValidationError: If the file is missing, unparsable or invalid
    """
    if Path(path).suffix in (".yaml", ".yml"):
        cfg = load_yaml_config(path)
    else:
        cfg = load_json_config(path)

    validate_risk_config(cfg)
    return cfg


def validate_all_configs(base_path: str = ".") -> Dict[str, Dict[str, Any]]:
    """
    Validate all configuration files under base_path/config.

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

    risk_path = find_risk_config(base_path)
    if risk_path is None:
        raise ConfigValidationError(
            f"No risk config found in {os.path.join(base_path, 'config')}"
        )

    configs = {"risk": load_risk_config(str(risk_path))}

    logger.info("[OK] ALL CONFIGURATIONS VALIDATED SUCCESSFULLY")
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
        risk = configs["risk"]
        print("\n✓ Risk configuration is valid.")
        print(f"  Account size: {risk['account_size']}")
        print(f"  Risk per trade: {risk['risk_percent']}%")
        print(f"  Max margin: {risk['max_margin_percent']}%")
        print(f"  Max leverage: {risk['max_leverage']}x")
    except ConfigValidationError as e:
        print(f"\n✗ Configuration validation failed: {e}")
        raise SystemExit(1)
