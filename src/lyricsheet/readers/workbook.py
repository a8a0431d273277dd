"""Reader for packaged spreadsheets (.xlsx / .xlsm).

Decoding and parsing are a single step here: openpyxl yields typed cell
values, so the grid may hold ``datetime``, ``int`` and ``float`` cells next to
strings.  Only the first worksheet is read.  Formula cells contribute their
cached value (``data_only=True``).
"""

import logging
import zipfile
from io import BytesIO

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from ..exceptions import WorkbookError
from .base import Grid, TableReader
from .utils import trim_blank_rows

logger = logging.getLogger(__name__)


class WorkbookReader(TableReader):
    """Reads the first worksheet of an Office Open XML workbook."""

    extensions = (".xlsx", ".xlsm")

    def read(self, data: bytes, filename: str) -> Grid:
        try:
            wb = openpyxl.load_workbook(BytesIO(data), read_only=True, data_only=True)
        except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError) as exc:
            raise WorkbookError(filename, str(exc) or type(exc).__name__) from exc

        try:
            if not wb.worksheets:
                raise WorkbookError(filename, "workbook has no worksheets")
            ws = wb.worksheets[0]
            rows = [
                ["" if value is None else value for value in row]
                for row in ws.iter_rows(values_only=True)
            ]
        finally:
            wb.close()

        grid = trim_blank_rows(rows)
        logger.debug("Read %d rows from sheet %r of %s", len(grid), ws.title, filename)
        return grid
