"""Encoders from a grid of cells to file bytes.

+--------+---------------------------------------------------------------+
| Format | Encoding                                                      |
+========+===============================================================+
| csv    | UTF-8 with BOM (so spreadsheet apps detect it), all cells     |
|        | quoted, CRLF line ends                                        |
+--------+---------------------------------------------------------------+
| tsv    | UTF-8 with BOM, tab separated, cells quoted only when needed  |
+--------+---------------------------------------------------------------+
| xlsx   | single worksheet, bold frozen header row (openpyxl)           |
+--------+---------------------------------------------------------------+

Every format can be read back by :mod:`lyricsheet.readers`.
"""

import csv
import io
from abc import ABC, abstractmethod
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font

Rows = Sequence[Sequence[Any]]


class TableWriter(ABC):
    """Abstract base class for all output formats."""

    extension: str = ""

    @abstractmethod
    def encode(self, rows: Rows) -> bytes:
        """Return *rows* encoded as a complete file."""


class CsvWriter(TableWriter):
    extension = ".csv"
    delimiter = ","
    quoting = csv.QUOTE_ALL

    def __init__(self, bom: bool = True):
        self.bom = bom

    def encode(self, rows: Rows) -> bytes:
        buffer = io.StringIO(newline="")
        writer = csv.writer(
            buffer, delimiter=self.delimiter, quoting=self.quoting, lineterminator="\r\n"
        )
        for row in rows:
            writer.writerow(["" if cell is None else cell for cell in row])
        return buffer.getvalue().encode("utf-8-sig" if self.bom else "utf-8")


class TsvWriter(CsvWriter):
    extension = ".tsv"
    delimiter = "\t"
    quoting = csv.QUOTE_MINIMAL


class XlsxWriter(TableWriter):
    extension = ".xlsx"

    def __init__(self, sheet_title: str = "Songs"):
        self.sheet_title = sheet_title

    def encode(self, rows: Rows) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = self.sheet_title
        for row in rows:
            ws.append([_sheet_value(value) for value in row])
            for cell in ws[ws.max_row]:
                # openpyxl turns "=..." into a formula; keep lyric text as text
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    cell.data_type = "s"
        if rows:
            for cell in ws[1]:
                cell.font = Font(bold=True)
            ws.freeze_panes = "A2"
        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


def _sheet_value(value: Any) -> Any:
    """Drop control characters that worksheets cannot store."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value
