from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any

# A parsed table: rows of cells.  Delimited text only ever yields strings;
# workbooks may also yield numbers and datetimes.  Rows may be ragged.
Grid = list[list[Any]]


class TableReader(ABC):
    """Abstract base class for all file-format readers."""

    extensions: tuple[str, ...] = ()

    @classmethod
    def can_handle(cls, filename: str) -> bool:
        """Return True if this reader understands the file's extension."""
        return PurePath(filename).suffix.lower() in cls.extensions

    @abstractmethod
    def read(self, data: bytes, filename: str) -> Grid:
        """Turn a raw byte buffer into a grid of cells.

        The header row, when present, is ``grid[0]``.  Trailing rows that are
        entirely blank have already been removed.
        """
