"""Release-date normalization.

Dates arrive as free text ("2015-09-07", "2015.9.7", "2015年9月7日"), as
spreadsheet serial numbers (42254) or as native date values from a workbook.
All of them are rendered as ``Y/M/D`` without leading zeros: ``2015/9/7``.
Anything unrecognised is passed through unchanged.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any

# Day zero of the spreadsheet date system (1900 system, Lotus leap-year bug
# included), so serial 1 is 1899-12-31 and 42254 is 2015-09-07.
SERIAL_EPOCH = date(1899, 12, 30)
SERIAL_MIN = 20000  # 1954-10-03
SERIAL_MAX = 60000  # 2064-04-08

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_YMD_RE = re.compile(r"(?<!\d)(\d{4})\D+(\d{1,2})\D+(\d{1,2})(?!\d)")


def format_ymd(value: date) -> str:
    return f"{value.year}/{value.month}/{value.day}"


def serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet day serial, or None outside the plausible range."""
    if not SERIAL_MIN <= serial <= SERIAL_MAX:
        return None
    return SERIAL_EPOCH + timedelta(days=int(serial))


def normalize_date(value: Any) -> str:
    """Return *value* as a ``Y/M/D`` string.

    Blank input gives ``""``.  Text without a recognisable year-month-day
    pattern (``"TBD"``, ``"2015"``) is returned stripped but otherwise as-is.
    """
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return format_ymd(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        converted = serial_to_date(value)
        if converted:
            return format_ymd(converted)
        return str(int(value)) if float(value).is_integer() else str(value)

    text = str(value).strip()
    if not text:
        return ""

    if _NUMBER_RE.match(text):
        converted = serial_to_date(float(text))
        if converted:
            return format_ymd(converted)
        compact = _COMPACT_RE.match(text)
        if compact and _valid_ymd(*compact.groups()):
            year, month, day = (int(g) for g in compact.groups())
            return f"{year}/{month}/{day}"
        return text

    m = _YMD_RE.search(text)
    if m and _valid_ymd(*m.groups()):
        year, month, day = (int(g) for g in m.groups())
        return f"{year}/{month}/{day}"
    return text


def _valid_ymd(year: str, month: str, day: str) -> bool:
    try:
        date(int(year), int(month), int(day))
    except ValueError:
        return False
    return True
