"""Shared text helpers used by the table readers.

Implements the bytes → grid pipeline for delimited text:

  1. decode_bytes()      BOM sniffing with a UTF-8 fallback
  2. detect_delimiter()  comma vs. tab, decided by the first line
  3. parse_delimited()   quoted, RFC 4180-style text → list of rows
  4. trim_blank_rows()   drop wholly blank trailing rows

Two delimiter conventions are supported:

  comma  Excel "CSV UTF-8" and hand-written files:  "A,B","C""D"
  tab    copy/paste out of a spreadsheet, or "Unicode Text" exports
"""

import codecs
import csv
import io
import re
from typing import Any

from .base import Grid

_FIRST_LINE_RE = re.compile(r"\r\n|\r|\n")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_bytes(data: bytes) -> str:
    """Decode *data* to text by sniffing its byte-order mark.

    ``FF FE`` means UTF-16LE and ``FE FF`` UTF-16BE.  Anything else is read as
    UTF-8 and a UTF-8 BOM is dropped rather than kept as content.  Undecodable
    bytes are replaced; this function never raises.
    """
    if data.startswith(codecs.BOM_UTF16_LE):
        return data[2:].decode("utf-16-le", errors="replace")
    if data.startswith(codecs.BOM_UTF16_BE):
        return data[2:].decode("utf-16-be", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def detect_delimiter(text: str) -> str:
    """Return ``"\\t"`` when the first line has tabs but no commas, else ``","``."""
    first_line = _FIRST_LINE_RE.split(text, maxsplit=1)[0]
    if "," not in first_line and "\t" in first_line:
        return "\t"
    return ","


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_delimited(text: str, delimiter: str = ",") -> Grid:
    """Split decoded text into rows of string cells.

    Fields may be wrapped in double quotes, ``""`` inside quotes is a literal
    quote, and line breaks only survive inside quotes.  ``\\r\\n``, ``\\r`` and
    ``\\n`` all end a row.  Short rows are returned as-is (not padded).
    """
    # newline="" keeps the line endings so quoted multi-line cells stay intact
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    return trim_blank_rows([row for row in reader])


def is_blank_cell(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def trim_blank_rows(rows: Grid) -> Grid:
    """Drop trailing rows in which every cell is blank."""
    end = len(rows)
    while end and all(is_blank_cell(cell) for cell in rows[end - 1]):
        end -= 1
    return rows[:end]
