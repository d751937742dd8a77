"""
Form input parsing.

Converts the raw text typed into the calculator form into a typed RiskInput.
Range checks stay in the engine; this module only answers "is it a number".
"""

import math
import re
from typing import Mapping

from .risk_engine import InvalidInputError, RiskInput

FIELDS = (
    "account_size",
    "risk_percent",
    "max_margin_percent",
    "max_leverage",
    "entry_price",
    "sl_price",
)

# "1,000" or "1,234.5": a comma used as a thousands separator
_GROUPED = re.compile(r"^[-+]?\d{1,3}(,\d{3})+(\.\d*)?$")

DEFAULT_FORM_VALUES = {
    "account_size": "1000",
    "risk_percent": "2",
    "max_margin_percent": "75",
    "max_leverage": "125",
    "entry_price": "100",
    "sl_price": "97",
}


def parse_decimal(field: str, text: str) -> float:
    """
    Parse a decimal form value.

    Accepts surrounding whitespace and a comma decimal separator ("97,5").
    Thousands-grouped values ("1,000") are rejected rather than read as decimals.

    Raises:
        InvalidInputError: If the text is empty, non-numeric, NaN or infinite
    """
    if text is None:
        raise InvalidInputError(f"Missing value for {field}", field)

    stripped = str(text).strip()
    if not stripped:
        raise InvalidInputError(f"Missing value for {field}", field)
    if _GROUPED.match(stripped) or stripped.count(",") > 1:
        raise InvalidInputError(
            f"Invalid {field}: {text!r} looks thousands-grouped; enter digits without separators",
            field
        )
    cleaned = stripped.replace(",", ".")

    try:
        value = float(cleaned)
    except ValueError:
        raise InvalidInputError(f"Invalid {field}: {text!r} is not a number", field)

    if not math.isfinite(value):
        raise InvalidInputError(f"Invalid {field}: {text!r} is not a finite number", field)
    return value


def parse_integer(field: str, text: str) -> int:
    """Parse a whole-number form value, truncating any decimal part toward zero."""
    return int(parse_decimal(field, text))


def parse_risk_input(fields: Mapping[str, str]) -> RiskInput:
    """
    Build a RiskInput from raw form text.

    Args:
        fields: Mapping of field name -> text, keys as in FIELDS

    Returns:
        RiskInput with parsed numbers

    Raises:
        InvalidInputError: If a field is missing or does not parse
    """
    missing = [name for name in FIELDS if name not in fields]
    if missing:
        raise InvalidInputError(f"Missing fields: {', '.join(missing)}", missing[0])

    return RiskInput(
        account_size=parse_decimal("account_size", fields["account_size"]),
        risk_percent=parse_decimal("risk_percent", fields["risk_percent"]),
        max_margin_percent=parse_decimal("max_margin_percent", fields["max_margin_percent"]),
        max_leverage=parse_integer("max_leverage", fields["max_leverage"]),
        entry_price=parse_decimal("entry_price", fields["entry_price"]),
        sl_price=parse_decimal("sl_price", fields["sl_price"]),
    )
