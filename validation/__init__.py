"""
Validation and Safety Checks

Components:
- config_validator: Load and validate the risk configuration file
- invariants: Consistency checks on computed sizing results
"""

from .config_validator import (
    ConfigValidationError,
    load_risk_config,
    validate_risk_config,
    validate_all_configs
)

from .invariants import check_sizing_invariants

__all__ = [
    # Config
    'ConfigValidationError',
    'load_risk_config',
    'validate_risk_config',
    'validate_all_configs',

    # Invariants
    'check_sizing_invariants'
]
