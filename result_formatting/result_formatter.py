"""Result formatting logic for converting RiskResult to text/markdown/JSON."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import json

from risk_management import RiskResult

from .clipboard import clipboard_values, format_price


@dataclass
class FormatterConfig:
    """Configuration for result formatting."""

    currency_symbol: str = "$"

    # Max fraction digits for currency and percent values
    decimal_places: int = 2

    # Echo the account settings the result was computed with
    include_settings: bool = True

    # Line width for the text separator
    line_width: int = 60


class ResultFormatter(ABC):
    """Base class for result formatters."""

    def __init__(self, config: Optional[FormatterConfig] = None):
        """Initialize formatter with optional configuration."""
        self.config = config or FormatterConfig()

    @abstractmethod
    def format_result(self, result: RiskResult) -> str:
        """Format a single sizing result.

        Args:
            result: RiskResult to format

        Returns:
            Formatted string representation
        """
        pass

    def _format_currency(self, value: float) -> str:
        """Thousands separators, at most decimal_places fraction digits."""
        text = f"{value:,.{self.config.decimal_places}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return f"{self.config.currency_symbol}{text}"

    def _format_percent(self, value: float) -> str:
        return f"{value:.{self.config.decimal_places}f}%"

    def _format_risk(self, result: RiskResult) -> str:
        """Actual risk as currency plus percent of the account."""
        return (
            f"{self.config.currency_symbol}{result.risk_usd_actual:.{self.config.decimal_places}f} "
            f"({self._format_percent(result.risk_percent_actual)} of account)"
        )

    def _capped_note(self, result: RiskResult) -> str:
        if not result.margin_capped:
            return ""
        return (
            f"Position capped by max margin {self._format_currency(result.max_margin)}; "
            f"risk below target {self._format_currency(result.risk_usd_target)}"
        )


class TextResultFormatter(ResultFormatter):
    """Plain text formatter for sizing results."""

    def format_result(self, result: RiskResult) -> str:
        """Format result as plain text.

        Args:
            result: RiskResult to format

        Returns:
            Plain text representation
        """
        width = self.config.line_width
        lines = []

        # Order entry
        lines.append("=" * width)
        lines.append(f"{result.direction} POSITION")
        lines.append("=" * width)
        lines.append(f"Position Size: {self._format_currency(result.position_size)}")
        lines.append(f"Stop Loss: {format_price(result.inputs.sl_price)}")
        lines.append(f"Leverage: {result.leverage}x")
        lines.append(f"Margin Used: {self._format_currency(result.margin_used)}")

        # Risk analysis
        lines.append("-" * width)
        lines.append(f"Actual Risk: {self._format_risk(result)}")
        lines.append(f"SL Distance: {self._format_percent(result.sl_distance_percent * 100)}")
        note = self._capped_note(result)
        if note:
            lines.append(f"WARNING: {note}")

        if self.config.include_settings:
            inputs = result.inputs
            lines.append("-" * width)
            lines.append(f"Account Size: {self._format_currency(inputs.account_size)}")
            lines.append(f"Risk Setting: {inputs.risk_percent:g}%")
            lines.append(f"Max Margin: {inputs.max_margin_percent:g}%")
            lines.append(f"Max Leverage: {inputs.max_leverage}x")

        lines.append("=" * width)
        return "\n".join(lines)


class MarkdownResultFormatter(ResultFormatter):
    """Markdown formatter for sizing results."""

    def format_result(self, result: RiskResult) -> str:
        """Format result as markdown.

        Args:
            result: RiskResult to format

        Returns:
            Markdown representation
        """
        direction_emoji = {"LONG": "📈", "SHORT": "📉"}
        lines = [f"## {direction_emoji[result.direction]} {result.direction} position"]

        lines.append("### Order entry")
        lines.append(f"- **Position Size:** `{self._format_currency(result.position_size)}`")
        lines.append(f"- **Stop Loss:** `{format_price(result.inputs.sl_price)}`")
        lines.append(f"- **Leverage:** `{result.leverage}x`")
        lines.append(f"- **Margin Used:** {self._format_currency(result.margin_used)}")

        lines.append("### Risk analysis")
        lines.append(f"- **Actual Risk:** {self._format_risk(result)}")
        lines.append(f"- **SL Distance:** {self._format_percent(result.sl_distance_percent * 100)}")
        note = self._capped_note(result)
        if note:
            lines.append(f"> ⚠️ {note}")

        if self.config.include_settings:
            inputs = result.inputs
            lines.append("### Settings")
            lines.append(f"- Account Size: {self._format_currency(inputs.account_size)}")
            lines.append(f"- Risk Setting: {inputs.risk_percent:g}%")
            lines.append(f"- Max Margin: {inputs.max_margin_percent:g}%")
            lines.append(f"- Max Leverage: {inputs.max_leverage}x")

        return "\n".join(lines)


class JsonResultFormatter(ResultFormatter):
    """JSON formatter: full result plus clipboard-ready strings."""

    def format_result(self, result: RiskResult) -> str:
        payload = result.to_dict()
        payload["clipboard"] = clipboard_values(result)
        if not self.config.include_settings:
            payload.pop("inputs")
        return json.dumps(payload, indent=2)
