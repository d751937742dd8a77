"""Result formatting module for converting RiskResult objects to human-readable formats.

Renders the order-entry values (position size, stop loss, leverage, margin)
and the risk analysis of a sizing result. Formatting only: no sizing logic
lives here.

Main exports:
- ResultFormatter: Base class for formatting results
- TextResultFormatter: Plain text format
- MarkdownResultFormatter: Markdown format
- JsonResultFormatter: JSON format with clipboard values
- clipboard_values / clean_numeric: Bare numbers for pasting into an order ticket
"""

from .result_formatter import (
    FormatterConfig,
    ResultFormatter,
    TextResultFormatter,
    MarkdownResultFormatter,
    JsonResultFormatter,
)
from .clipboard import clean_numeric, clipboard_values, format_price

FORMATTERS = {
    "text": TextResultFormatter,
    "markdown": MarkdownResultFormatter,
    "json": JsonResultFormatter,
}

__all__ = [
    "FormatterConfig",
    "ResultFormatter",
    "TextResultFormatter",
    "MarkdownResultFormatter",
    "JsonResultFormatter",
    "FORMATTERS",
    "clean_numeric",
    "clipboard_values",
    "format_price",
]
