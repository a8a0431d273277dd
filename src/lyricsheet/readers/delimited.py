"""Reader for comma- and tab-delimited text files (.csv, .tsv, .txt)."""

import logging

from .base import Grid, TableReader
from .utils import decode_bytes, detect_delimiter, parse_delimited

logger = logging.getLogger(__name__)


class DelimitedTextReader(TableReader):
    """Reads CSV/TSV in UTF-8 (with or without BOM) or BOM-marked UTF-16."""

    extensions = (".csv", ".tsv", ".txt")

    def read(self, data: bytes, filename: str) -> Grid:
        text = decode_bytes(data)
        delimiter = detect_delimiter(text)
        grid = parse_delimited(text, delimiter)
        logger.debug(
            "Parsed %s as %s-delimited text: %d rows",
            filename,
            "tab" if delimiter == "\t" else "comma",
            len(grid),
        )
        return grid
