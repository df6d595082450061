"""
Shared utilities for spreadsheet ingestion: display text, lenient number
and currency extraction, calendar helpers.
"""

import calendar
import re
from datetime import date, datetime, time
from typing import Any, NamedTuple

from ..config import DISPLAY_DATE_FORMAT

_INT_PREFIX = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_CURRENCY_NOISE = re.compile(r"[R$\s.]")


class CellValue(NamedTuple):
    """A non-empty cell: the typed value and its display text."""

    value: Any
    text: str


def is_number(val: Any) -> bool:
    """True for int/float values, excluding booleans."""
    return isinstance(val, (int, float)) and not isinstance(val, bool)


def display_text(val: Any) -> str:
    """Render a cell value the way a spreadsheet would display it."""
    if val is None:
        return ""
    if isinstance(val, bool):
        return "TRUE" if val else "FALSE"
    if isinstance(val, (datetime, date)):
        return val.strftime(DISPLAY_DATE_FORMAT)
    if isinstance(val, time):
        return val.isoformat()
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val).strip()


def parse_int_prefix(text: Any) -> int | None:
    """Parse the leading integer of a string ("12 leads" -> 12).

    Returns None when the string does not start with digits.
    """
    if text is None:
        return None
    match = _INT_PREFIX.match(str(text).strip())
    if match is None:
        return None
    return int(match.group())


def parse_float_prefix(text: Any) -> float | None:
    """Parse the leading decimal number of a string ("3.5x" -> 3.5)."""
    if text is None:
        return None
    match = _FLOAT_PREFIX.match(str(text).strip())
    if match is None:
        return None
    return float(match.group())


def cell_number(cell: CellValue | None) -> int | float:
    """Extract a count from a cell.

    Order of preference: the raw numeric value, the leading integer of the
    display text, the leading integer of the raw value, then 0. Formula cells
    whose cached result is a string still yield their number this way.
    """
    if cell is None:
        return 0
    if is_number(cell.value):
        return cell.value
    if cell.text:
        parsed = parse_int_prefix(cell.text)
        return 0 if parsed is None else parsed
    if cell.value is not None:
        parsed = parse_int_prefix(cell.value)
        return 0 if parsed is None else parsed
    return 0


def cell_currency(cell: CellValue | None) -> float:
    """Extract a BRL amount from a cell.

    "R$ 1.234,50" -> 1234.5. Thousands dots and spaces are dropped and the
    decimal comma becomes a point before parsing.
    """
    if cell is None:
        return 0.0
    if is_number(cell.value):
        return float(cell.value)
    if cell.text:
        cleaned = _CURRENCY_NOISE.sub("", cell.text).replace(",", ".", 1).strip()
        parsed = parse_float_prefix(cleaned)
        return 0.0 if parsed is None else parsed
    return 0.0


def cell_text(cell: CellValue | None) -> str:
    """Display text of a cell, '' for empty cells."""
    if cell is None or cell.text is None:
        return ""
    return cell.text.strip()


def days_in_month(today: date | None = None) -> int:
    """Number of days in the month containing `today` (default: now)."""
    if today is None:
        today = date.today()
    return calendar.monthrange(today.year, today.month)[1]
