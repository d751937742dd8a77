"""
What-if sizing tables.

Re-runs the sizing for a range of stop-loss prices or risk percents while
keeping the rest of the inputs fixed, and collects the results into a
DataFrame for side-by-side comparison.

Usage:
    from risk_management.scenario_table import stop_loss_ladder, sweep_stop_losses

    ladder = stop_loss_ladder(100.0, 0.005, 0.05, steps=10, direction="LONG")
    table = sweep_stop_losses(base_input, ladder)
    print(table[["sl_price", "position_size", "leverage"]])
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Dict, Any

import numpy as np
import pandas as pd

from .risk_engine import InvalidInputError, RiskInput, compute

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "position_size",
    "leverage",
    "margin_used",
    "risk_usd_actual",
    "risk_percent_actual",
    "sl_distance_percent",
    "max_margin",
    "margin_capped",
]


def stop_loss_ladder(
    entry_price: float,
    min_distance_pct: float,
    max_distance_pct: float,
    steps: int = 10,
    direction: str = "LONG"
) -> np.ndarray:
    """
    Evenly spaced stop-loss prices between two distances from entry.

    Args:
        entry_price: Trade entry price
        min_distance_pct: Closest stop as a fraction of entry (0.005 = 0.5%)
        max_distance_pct: Farthest stop as a fraction of entry
        steps: Number of prices to generate
        direction: "LONG" puts stops below entry, "SHORT" above

    Returns:
        Array of stop-loss prices, closest first
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    if not 0 < min_distance_pct <= max_distance_pct:
        raise ValueError(
            f"Invalid distance range: {min_distance_pct} .. {max_distance_pct}"
        )

    distances = np.linspace(min_distance_pct, max_distance_pct, steps)
    if direction == "LONG":
        return entry_price * (1 - distances)
    if direction == "SHORT":
        return entry_price * (1 + distances)
    raise ValueError(f"Unsupported direction: {direction}. Must be 'LONG' or 'SHORT'.")


def _row(risk_input: RiskInput) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "sl_price": risk_input.sl_price,
        "risk_percent": risk_input.risk_percent,
    }
    try:
        result = compute(risk_input)
    except InvalidInputError as e:
        logger.debug(f"Scenario skipped: {e}")
        row.update({col: np.nan for col in RESULT_COLUMNS})
        row["error"] = str(e)
        return row

    for col in RESULT_COLUMNS:
        row[col] = getattr(result, col)
    row["error"] = None
    return row


def _to_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=["sl_price", "risk_percent"] + RESULT_COLUMNS + ["error"])


def sweep_stop_losses(base: RiskInput, sl_prices: Iterable[float]) -> pd.DataFrame:
    """
    Size the same trade against several stop-loss prices.

    Invalid prices (e.g. equal to entry) stay in the table with NaN results
    and the reason in the ``error`` column.
    """
    rows = [_row(replace(base, sl_price=float(sl))) for sl in sl_prices]
    return _to_frame(rows)


def sweep_risk_percents(base: RiskInput, risk_percents: Iterable[float]) -> pd.DataFrame:
    """Size the same trade at several risk levels."""
    rows = [_row(replace(base, risk_percent=float(pct))) for pct in risk_percents]
    return _to_frame(rows)
