import logging
from pathlib import PurePath

from .exceptions import UnsupportedFormatError
from .readers.base import TableReader
from .readers.delimited import DelimitedTextReader
from .readers.workbook import WorkbookReader
from .writers import CsvWriter, TableWriter, TsvWriter, XlsxWriter

logger = logging.getLogger(__name__)

_READERS: list[type[TableReader]] = [
    WorkbookReader,
    DelimitedTextReader,
]

FORMATS = ("csv", "tsv", "xlsx")


def get_reader(filename: str) -> TableReader:
    """Return an instantiated reader for *filename*'s extension.

    Unknown extensions are read as delimited text.
    """
    for cls in _READERS:
        if cls.can_handle(filename):
            return cls()
    logger.info("No reader for %r; treating it as delimited text", filename)
    return DelimitedTextReader()


def get_writer(fmt: str, *, bom: bool = True) -> TableWriter:
    """Return a writer for *fmt* (``csv``, ``tsv`` or ``xlsx``).

    Raises UnsupportedFormatError for anything else.
    """
    name = fmt.lower().lstrip(".")
    if name == "csv":
        return CsvWriter(bom=bom)
    if name == "tsv":
        return TsvWriter(bom=bom)
    if name == "xlsx":
        return XlsxWriter()
    raise UnsupportedFormatError(fmt)


def format_for_path(path: str, default: str = "csv") -> str:
    """Guess an output format from a file name, falling back to *default*."""
    suffix = PurePath(path).suffix.lower().lstrip(".")
    return suffix if suffix in FORMATS else default
