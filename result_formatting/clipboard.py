"""Clipboard-ready values: bare numbers an exchange order form accepts."""

import re
from typing import Dict

import numpy as np

from risk_management import RiskResult

_NON_NUMERIC = re.compile(r"[^0-9.]")


def clean_numeric(text: str) -> str:
    """Strip everything except digits and the decimal point ("$1,234.5" -> "1234.5")."""
    return _NON_NUMERIC.sub("", text)


def format_price(price: float) -> str:
    """Shortest string that round-trips the price, without a trailing ".0"."""
    return np.format_float_positional(float(price), trim="-")


def clipboard_values(result: RiskResult) -> Dict[str, str]:
    """
    Values to paste into an exchange order ticket.

    Returns:
        Dict with position_size (2 decimals), stop_loss, leverage and
        margin_used, all free of currency symbols and separators
    """
    return {
        "position_size": clean_numeric(f"{result.position_size:.2f}"),
        "stop_loss": clean_numeric(format_price(result.inputs.sl_price)),
        "leverage": str(result.leverage),
        "margin_used": clean_numeric(f"{result.margin_used:.2f}"),
    }
