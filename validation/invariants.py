"""
Invariant Checks for Position Sizing

Reusable checks that a RiskResult is internally consistent. All functions
raise AssertionError with descriptive messages when an invariant is violated.
"""

import math

from risk_management import RiskResult

NUMERIC_FIELDS = (
    "position_size",
    "margin_used",
    "risk_usd_actual",
    "risk_percent_actual",
    "sl_distance_percent",
    "risk_usd_target",
    "max_margin",
)


def check_sizing_invariants(result: RiskResult, epsilon: float = 1e-9) -> None:
    """
    Validate leverage, margin and finiteness invariants on a sizing result.

    Checks:
    1. Every numeric field is finite
    2. Leverage is an int in [1, max_leverage]
    3. margin_used <= max_margin (+ epsilon)
    4. margin_used * leverage ≈ position_size
    5. Realized risk never exceeds the target risk

    Args:
        result: RiskResult to check
        epsilon: Tolerance for floating-point comparisons

    Raises:
        AssertionError: When any invariant is violated
    """
    for name in NUMERIC_FIELDS:
        value = getattr(result, name)
        if not math.isfinite(value):
            raise AssertionError(f"Non-finite {name}: {value}")

    max_leverage = result.inputs.max_leverage
    if isinstance(result.leverage, bool) or not isinstance(result.leverage, int):
        raise AssertionError(
            f"Leverage must be an int, got {type(result.leverage).__name__}"
        )
    if not 1 <= result.leverage <= max_leverage:
        raise AssertionError(
            f"Leverage {result.leverage}x outside [1, {max_leverage}]"
        )

    if result.margin_used > result.max_margin + epsilon:
        raise AssertionError(
            f"Margin invariant violated!\n"
            f"  Margin used: ${result.margin_used:.2f}\n"
            f"  Max margin: ${result.max_margin:.2f}"
        )

    notional = result.margin_used * result.leverage
    if not math.isclose(notional, result.position_size, rel_tol=1e-9, abs_tol=epsilon):
        raise AssertionError(
            f"Position/margin mismatch: margin ${result.margin_used:.2f} x "
            f"{result.leverage} = ${notional:.2f}, position ${result.position_size:.2f}"
        )

    if result.risk_usd_actual > result.risk_usd_target * (1 + 1e-9) + epsilon:
        raise AssertionError(
            f"Realized risk ${result.risk_usd_actual:.2f} exceeds target "
            f"${result.risk_usd_target:.2f}"
        )
