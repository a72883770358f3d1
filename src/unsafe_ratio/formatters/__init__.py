"""Output formatters for unsafe-ratio."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .diagnostics import DiagnosticRenderer
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter


def get_formatter(name: str, show_percent: bool = False) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "json", "csv", "rich"
        show_percent: Append percentages where the format supports it

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "text": TextFormatter,
        "json": JsonFormatter,
        "csv": CsvFormatter,
        "rich": RichFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls(show_percent=show_percent)


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "RichFormatter",
    "DiagnosticRenderer",
    "get_formatter",
]
