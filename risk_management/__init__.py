"""
Risk Management Module

Position sizing for a single leveraged trade: position size, leverage and
margin from account balance, risk tolerance and entry/stop-loss prices.
"""

from .risk_engine import (
    InvalidInputError,
    RiskConfig,
    RiskEngine,
    RiskInput,
    RiskResult,
    compute,
)
from .input_parser import DEFAULT_FORM_VALUES, parse_risk_input

__all__ = [
    "InvalidInputError",
    "RiskConfig",
    "RiskEngine",
    "RiskInput",
    "RiskResult",
    "compute",
    "DEFAULT_FORM_VALUES",
    "parse_risk_input",
]
