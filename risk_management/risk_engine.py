"""
Position Sizing Risk Engine

Turns an account balance, a risk tolerance and an entry/stop-loss pair into a
position size, an integer leverage and the margin that position ties up.
All sizing routes through ``compute``; ``RiskEngine`` adds configured account
defaults on top of it.
"""

import json
import logging
import math
import numbers
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a sizing input is missing, non-numeric or out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class RiskInput:
    """
    One snapshot of the calculator inputs.

    Attributes:
        account_size: Account equity in currency units
        risk_percent: Percent of the account to lose if the stop is hit (2 = 2%)
        max_margin_percent: Percent of the account usable as margin
        max_leverage: Highest leverage multiplier allowed
        entry_price: Trade entry price
        sl_price: Stop-loss price
    """
    account_size: float
    risk_percent: float
    max_margin_percent: float
    max_leverage: int
    entry_price: float
    sl_price: float


@dataclass(frozen=True)
class RiskResult:
    """
    Sizing result for a single RiskInput.

    Attributes:
        inputs: The RiskInput this result was computed from
        position_size: Notional value of the position
        leverage: Integer leverage multiplier in [1, max_leverage]
        margin_used: Capital committed as margin
        risk_usd_actual: Currency lost if the stop is hit
        risk_percent_actual: risk_usd_actual as percent of the account
        sl_distance_percent: Stop distance as a fraction of the entry price
        risk_usd_target: Currency risk requested before any capping
        max_margin: Margin ceiling in currency units
        margin_capped: True when the margin ceiling reduced the position
    """
    inputs: RiskInput
    position_size: float
    leverage: int
    margin_used: float
    risk_usd_actual: float
    risk_percent_actual: float
    sl_distance_percent: float
    risk_usd_target: float
    max_margin: float
    margin_capped: bool

    @property
    def direction(self) -> str:
        """LONG when the stop sits below entry, SHORT otherwise."""
        return "LONG" if self.inputs.sl_price < self.inputs.entry_price else "SHORT"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["direction"] = self.direction
        return data


def _require_number(field: str, value: Any) -> float:
    # bool is an int subclass but never a meaningful price or percent
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"Invalid {field}: {value!r}. Must be a number.", field)
    try:
        value = float(value)
    except OverflowError:
        raise InvalidInputError(f"Invalid {field}: too large to represent.", field)
    if not math.isfinite(value):
        raise InvalidInputError(f"Invalid {field}: {value}. Must be finite.", field)
    return value


def _validate(risk_input: RiskInput) -> RiskInput:
    """Check every field and return a copy with normalized numeric types."""
    account_size = _require_number("account_size", risk_input.account_size)
    risk_percent = _require_number("risk_percent", risk_input.risk_percent)
    max_margin_percent = _require_number("max_margin_percent", risk_input.max_margin_percent)
    max_leverage = _require_number("max_leverage", risk_input.max_leverage)
    entry_price = _require_number("entry_price", risk_input.entry_price)
    sl_price = _require_number("sl_price", risk_input.sl_price)

    if account_size <= 0:
        raise InvalidInputError(
            f"Invalid account_size: {account_size}. Must be positive.", "account_size"
        )
    if risk_percent <= 0 or risk_percent > 100:
        raise InvalidInputError(
            f"Invalid risk_percent: {risk_percent}. Must be in (0, 100].", "risk_percent"
        )
    if max_margin_percent <= 0 or max_margin_percent > 100:
        raise InvalidInputError(
            f"Invalid max_margin_percent: {max_margin_percent}. Must be in (0, 100].",
            "max_margin_percent"
        )
    if not max_leverage.is_integer() or max_leverage < 1:
        raise InvalidInputError(
            f"Invalid max_leverage: {max_leverage}. Must be a whole number >= 1.",
            "max_leverage"
        )
    if entry_price <= 0:
        raise InvalidInputError(
            f"Invalid entry_price: {entry_price}. Must be positive.", "entry_price"
        )
    if sl_price <= 0:
        raise InvalidInputError(
            f"Invalid sl_price: {sl_price}. Must be positive.", "sl_price"
        )
    if entry_price == sl_price:
        raise InvalidInputError(
            f"Stop-loss price {sl_price} is equal to entry price {entry_price}", "sl_price"
        )

    return RiskInput(
        account_size=account_size,
        risk_percent=risk_percent,
        max_margin_percent=max_margin_percent,
        max_leverage=int(max_leverage),
        entry_price=entry_price,
        sl_price=sl_price,
    )


def compute(risk_input: RiskInput) -> RiskResult:
    """
    Size a position so that hitting the stop loses risk_percent of the account.

    Leverage is the smallest whole multiplier that keeps the margin within
    max_margin_percent of the account, capped at max_leverage. When even the
    capped leverage needs more margin than allowed, the position is shrunk to
    max_margin * leverage and the realized risk drops below the target.

    Args:
        risk_input: Calculator inputs

    Returns:
        RiskResult with position size, leverage, margin and realized risk

    Raises:
        InvalidInputError: If any input is non-numeric, non-finite or out of
            range, including a stop-loss equal to the entry price
    """
    inputs = _validate(risk_input)

    risk_usd_target = inputs.account_size * (inputs.risk_percent / 100)
    sl_distance_percent = abs(inputs.entry_price - inputs.sl_price) / inputs.entry_price

    position_size = risk_usd_target / sl_distance_percent
    max_margin = inputs.account_size * (inputs.max_margin_percent / 100)

    leverage = min(position_size / max_margin, inputs.max_leverage)
    leverage = min(math.ceil(leverage), inputs.max_leverage)

    margin_used = position_size / leverage
    margin_capped = margin_used > max_margin
    if margin_capped:
        logger.info(
            f"[RISK] Margin ${margin_used:.2f} exceeds max ${max_margin:.2f} at "
            f"{leverage}x. Capping position."
        )
        position_size = max_margin * leverage
        margin_used = max_margin

    risk_usd_actual = position_size * sl_distance_percent
    risk_percent_actual = (risk_usd_actual / inputs.account_size) * 100

    for name, value in (
        ("position_size", position_size),
        ("margin_used", margin_used),
        ("risk_usd_actual", risk_usd_actual),
        ("risk_percent_actual", risk_percent_actual),
    ):
        if not math.isfinite(value):
            raise InvalidInputError(
                f"Inputs overflow: {name} is not finite. Use smaller account or price values.",
                "account_size"
            )

    logger.debug(
        f"[RISK] entry={inputs.entry_price} sl={inputs.sl_price} -> "
        f"size={position_size:.2f} lev={leverage}x margin={margin_used:.2f} "
        f"risk={risk_percent_actual:.2f}%"
    )

    return RiskResult(
        inputs=inputs,
        position_size=position_size,
        leverage=leverage,
        margin_used=margin_used,
        risk_usd_actual=risk_usd_actual,
        risk_percent_actual=risk_percent_actual,
        sl_distance_percent=sl_distance_percent,
        risk_usd_target=risk_usd_target,
        max_margin=max_margin,
        margin_capped=margin_capped,
    )


@dataclass
class RiskConfig:
    """
    Account defaults loaded from config/risk.json (or risk.yaml).

    Attributes:
        account_size: Account equity used when a trade does not override it
        risk_percent: Percent of the account risked per trade
        max_margin_percent: Percent of the account usable as margin
        max_leverage: Highest leverage multiplier allowed
    """
    account_size: float = 1000.0
    risk_percent: float = 2.0
    max_margin_percent: float = 75.0
    max_leverage: int = 125

    @classmethod
    def from_file(cls, config_path: Path) -> "RiskConfig":
        """
        Load account defaults from a JSON or YAML file.

        Args:
            config_path: Path to risk.json / risk.yaml

        Returns:
            RiskConfig with loaded parameters, or defaults if the file is
            missing or unreadable
        """
        config_path = Path(config_path)
        if not config_path.exists():
            logger.warning(f"[RISK] Config file {config_path} not found, using defaults")
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
            logger.error(f"[RISK] Error loading config from {config_path}: {e}")
            return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskConfig":
        """Create RiskConfig from a dictionary, falling back to defaults per key."""
        return cls(
            account_size=float(data.get("account_size", 1000.0)),
            risk_percent=float(data.get("risk_percent", 2.0)),
            max_margin_percent=float(data.get("max_margin_percent", 75.0)),
            max_leverage=int(data.get("max_leverage", 125)),
        )

    def to_input(self, entry_price: float, sl_price: float) -> RiskInput:
        return RiskInput(
            account_size=self.account_size,
            risk_percent=self.risk_percent,
            max_margin_percent=self.max_margin_percent,
            max_leverage=self.max_leverage,
            entry_price=entry_price,
            sl_price=sl_price,
        )


class RiskEngine:
    """
    Position sizing with configured account defaults.

    Handles:
    - Filling account parameters a caller leaves out from RiskConfig
    - Delegating the sizing itself to compute()
    """

    def __init__(self, config: Optional[RiskConfig] = None):
        self.config = config or RiskConfig()

    def size_trade(
        self,
        entry_price: float,
        sl_price: float,
        account_size: Optional[float] = None,
        risk_percent: Optional[float] = None,
        max_margin_percent: Optional[float] = None,
        max_leverage: Optional[int] = None
    ) -> RiskResult:
        """
        Size a trade, taking any omitted account parameter from the config.

        Raises:
            InvalidInputError: If the resulting input set is invalid
        """
        risk_input = self.config.to_input(entry_price, sl_price)
        overrides = {
            "account_size": account_size,
            "risk_percent": risk_percent,
            "max_margin_percent": max_margin_percent,
            "max_leverage": max_leverage,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            risk_input = replace(risk_input, **overrides)
        return compute(risk_input)
