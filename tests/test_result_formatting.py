"""Tests for result_formatting module."""

import json

import pytest

from risk_management import RiskInput, compute
from result_formatting import (
    FORMATTERS,
    FormatterConfig,
    JsonResultFormatter,
    MarkdownResultFormatter,
    ResultFormatter,
    TextResultFormatter,
    clean_numeric,
    clipboard_values,
    format_price,
)


# ========== Fixtures ==========

@pytest.fixture
def sample_result():
    """Reference $1000 / 2% / 3% stop LONG result."""
    return compute(RiskInput(
        account_size=1000.0,
        risk_percent=2.0,
        max_margin_percent=75.0,
        max_leverage=125,
        entry_price=100.0,
        sl_price=97.0,
    ))


@pytest.fixture
def capped_result():
    """SHORT result squeezed by a 10% margin ceiling."""
    return compute(RiskInput(
        account_size=1000.0,
        risk_percent=2.0,
        max_margin_percent=10.0,
        max_leverage=5,
        entry_price=100.0,
        sl_price=103.0,
    ))


# ========== Clipboard ==========

class TestClipboard:
    """Test clipboard-ready values."""

    def test_clean_numeric(self):
        assert clean_numeric("$1,234.56") == "1234.56"
        assert clean_numeric("125x") == "125"

    def test_format_price(self):
        assert format_price(97.0) == "97"
        assert format_price(97.25) == "97.25"
        assert format_price(0.00001) == "0.00001"

    def test_clipboard_values(self, sample_result):
        values = clipboard_values(sample_result)

        assert values == {
            "position_size": "666.67",
            "stop_loss": "97",
            "leverage": "1",
            "margin_used": "666.67",
        }


# ========== Text ==========

class TestTextResultFormatter:
    """Test plain text formatting."""

    def test_order_entry_block(self, sample_result):
        text = TextResultFormatter().format_result(sample_result)

        assert "LONG POSITION" in text
        assert "Position Size: $666.67" in text
        assert "Stop Loss: 97" in text
        assert "Leverage: 1x" in text
        assert "Margin Used: $666.67" in text

    def test_risk_analysis_block(self, sample_result):
        text = TextResultFormatter().format_result(sample_result)

        assert "Actual Risk: $20.00 (2.00% of account)" in text
        assert "SL Distance: 3.00%" in text
        assert "WARNING" not in text

    def test_settings_block(self, sample_result):
        text = TextResultFormatter().format_result(sample_result)

        assert "Account Size: $1,000" in text
        assert "Risk Setting: 2%" in text
        assert "Max Margin: 75%" in text
        assert "Max Leverage: 125x" in text

    def test_settings_can_be_hidden(self, sample_result):
        formatter = TextResultFormatter(FormatterConfig(include_settings=False))
        assert "Account Size" not in formatter.format_result(sample_result)

    def test_capped_warning(self, capped_result):
        text = TextResultFormatter().format_result(capped_result)

        assert "SHORT POSITION" in text
        assert "Position Size: $500" in text
        assert "WARNING: Position capped by max margin $100" in text
        assert "Actual Risk: $15.00 (1.50% of account)" in text

    def test_currency_formatting(self):
        formatter = TextResultFormatter()
        assert formatter._format_currency(1234.5) == "$1,234.5"
        assert formatter._format_currency(1000000) == "$1,000,000"
        assert formatter._format_currency(0.456) == "$0.46"

    def test_custom_currency_symbol(self, sample_result):
        formatter = TextResultFormatter(FormatterConfig(currency_symbol="€"))
        assert "Position Size: €666.67" in formatter.format_result(sample_result)


# ========== Markdown ==========

class TestMarkdownResultFormatter:
    """Test markdown formatting."""

    def test_markdown_sections(self, sample_result):
        md = MarkdownResultFormatter().format_result(sample_result)

        assert md.startswith("## 📈 LONG position")
        assert "### Order entry" in md
        assert "- **Position Size:** `$666.67`" in md
        assert "- **Leverage:** `1x`" in md
        assert "### Risk analysis" in md
        assert "### Settings" in md

    def test_markdown_capped_note(self, capped_result):
        md = MarkdownResultFormatter().format_result(capped_result)

        assert md.startswith("## 📉 SHORT position")
        assert "> ⚠️ Position capped" in md


# ========== JSON ==========

class TestJsonResultFormatter:
    """Test JSON formatting."""

    def test_json_payload(self, sample_result):
        payload = json.loads(JsonResultFormatter().format_result(sample_result))

        assert payload["leverage"] == 1
        assert payload["direction"] == "LONG"
        assert payload["margin_capped"] is False
        assert payload["position_size"] == pytest.approx(666.6667, abs=1e-3)
        assert payload["clipboard"]["stop_loss"] == "97"
        assert payload["inputs"]["max_leverage"] == 125

    def test_json_without_settings(self, sample_result):
        formatter = JsonResultFormatter(FormatterConfig(include_settings=False))
        payload = json.loads(formatter.format_result(sample_result))

        assert "inputs" not in payload


def test_formatter_registry():
    assert set(FORMATTERS) == {"text", "markdown", "json"}
    for formatter_cls in FORMATTERS.values():
        assert issubclass(formatter_cls, ResultFormatter)


def test_base_formatter_is_abstract():
    with pytest.raises(TypeError):
        ResultFormatter()
