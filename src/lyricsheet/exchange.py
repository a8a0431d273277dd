"""Public entry points: import a table file, export the catalog, make a template.

All three work on byte buffers; reading and writing files is the caller's job.

Usage::

    from lyricsheet.exchange import export_table, import_table
    report = import_table(catalog, Path("songs.csv").read_bytes(), "songs.csv")
    Path("out.xlsx").write_bytes(export_table(catalog, None, "xlsx"))
"""

import logging
from datetime import date
from typing import Callable, Sequence

from .export import TableExporter
from .models import Catalog
from .reconcile import ImportReport, Reconciler
from .registry import get_reader, get_writer

logger = logging.getLogger(__name__)


def import_table(
    catalog: Catalog,
    data: bytes,
    filename: str,
    *,
    today: Callable[[], date] | None = None,
) -> ImportReport:
    """Parse *data* and merge its rows into *catalog*.

    *filename* only selects the reader by extension.  Raises
    MissingColumnsError (catalog untouched) when the album and song title
    columns are missing, and WorkbookError for a spreadsheet that cannot be
    opened.
    """
    grid = get_reader(filename).read(data, filename)
    logger.info("Importing %s: %d data row(s)", filename, max(len(grid) - 1, 0))
    return Reconciler(catalog, today=today).import_grid(grid)


def export_table(
    catalog: Catalog,
    fields: Sequence[str] | None = None,
    fmt: str = "csv",
    *,
    album: str | None = None,
    song: str | None = None,
    bom: bool = True,
) -> bytes:
    """Flatten *catalog* (or one album/song of it) and encode it as *fmt*."""
    rows = TableExporter(fields).render(catalog, album=album, song=song)
    logger.info("Exporting %d row(s) as %s", len(rows) - 1, fmt)
    return get_writer(fmt, bom=bom).encode(rows)


def template(fields: Sequence[str] | None = None, fmt: str = "csv", *, bom: bool = True) -> bytes:
    """Return a file holding only the header row for *fields*."""
    return get_writer(fmt, bom=bom).encode([TableExporter(fields).template_header()])
