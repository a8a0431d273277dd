import re
import sys
from dataclasses import replace
from pathlib import Path

import click

from .config import ExchangeConfig, load_config
from .exceptions import LyricsheetError
from .exchange import export_table, import_table, template
from .fields import FIELD_IDS, FIELD_LABELS, REQUIRED_FIELDS
from .logging_config import setup_logging
from .models import title_key
from .registry import FORMATS, format_for_path
from .search import MAX_RESULTS, search_catalog
from .snapshot import load_catalog, save_catalog
from .vocab import extract_vocab


def _slugify(text: str) -> str:
    """Convert a string to a lowercase hyphenated slug suitable for filenames."""
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)   # drop punctuation
    text = re.sub(r"[\s_]+", "-", text)     # spaces/underscores → hyphens
    text = re.sub(r"-{2,}", "-", text)      # collapse multiple hyphens
    return text.strip("-")


def _default_filename(stem: str, fmt: str, *qualifiers: str | None) -> str:
    parts = [stem, *(_slugify(q) for q in qualifiers if q)]
    return f"{'-'.join(p for p in parts if p)}.{fmt}"


def _parse_fields(values: tuple[str, ...]) -> list[str] | None:
    """Flatten repeated and comma-separated --fields values."""
    names = [name.strip() for value in values for name in value.split(",")]
    return [name for name in names if name] or None


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _emit(data: bytes, fmt: str, output_path: str | None, default_name: str, stdout: bool) -> None:
    if stdout:
        click.echo(data.decode("utf-8-sig"), nl=False)
        return
    dest = Path(output_path) if output_path else Path(default_name)
    dest.write_bytes(data)
    click.echo(f"Written to {dest}")


_catalog_option = click.option(
    "-c", "--catalog", "catalog_path", default=None, metavar="PATH",
    help="Catalog JSON file (default: $LYRICSHEET_CATALOG or catalog.json).",
)
_fields_option = click.option(
    "-f", "--fields", "field_values", multiple=True, metavar="FIELD[,FIELD...]",
    help="Field ids to include, in order (default: all). Repeatable.",
)
_format_option = click.option(
    "--format", "fmt", type=click.Choice(FORMATS), default=None,
    help="Output format (default: from --output extension, else csv).",
)
_stdout_option = click.option(
    "--stdout", is_flag=True, default=False,
    help="Print to stdout instead of writing a file (csv/tsv only).",
)


def _resolve_format(config: ExchangeConfig, fmt: str | None, output_path: str | None, stdout: bool) -> str:
    if fmt is None:
        fmt = format_for_path(output_path, config.default_format) if output_path else config.default_format
    if stdout and fmt == "xlsx":
        raise click.UsageError("--stdout cannot be used with xlsx output")
    return fmt


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log progress to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Import and export song lyrics, translations, vocabulary and grammar
    notes as CSV, TSV or XLSX tables.
    """
    config = load_config()
    if verbose:
        config = replace(config, log_level="DEBUG")
    setup_logging(config)
    ctx.obj = config


@main.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_catalog_option
@click.option("--dry-run", is_flag=True, default=False,
              help="Report what would be imported without saving the catalog.")
@click.pass_obj
def import_command(config: ExchangeConfig, file: Path, catalog_path: str | None, dry_run: bool) -> None:
    """Merge the rows of FILE into the catalog.

    Albums and songs are matched by title, ignoring case, and created when
    missing.  Lyrics, vocabulary and grammar of each song named in FILE are
    replaced by the rows FILE holds for it.
    """
    catalog_path = catalog_path or config.catalog_path
    try:
        catalog = load_catalog(catalog_path)
        report = import_table(catalog, file.read_bytes(), file.name)
    except LyricsheetError as exc:
        _fail(exc)
        return

    if not dry_run:
        save_catalog(catalog, catalog_path)
    click.echo(report.summary())


@main.command("export")
@_catalog_option
@_fields_option
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: export[-<album>][-<song>].<format>).")
@_format_option
@click.option("--album", default=None, help="Only export this album.")
@click.option("--song", default=None, help="Only export songs with this title.")
@_stdout_option
@click.pass_obj
def export_command(
    config: ExchangeConfig,
    catalog_path: str | None,
    field_values: tuple[str, ...],
    output_path: str | None,
    fmt: str | None,
    album: str | None,
    song: str | None,
    stdout: bool,
) -> None:
    """Export the catalog as one flat table, one row per line, word or
    grammar point.
    """
    fmt = _resolve_format(config, fmt, output_path, stdout)
    try:
        catalog = load_catalog(catalog_path or config.catalog_path)
        data = export_table(
            catalog,
            _parse_fields(field_values),
            fmt,
            album=album,
            song=song,
            bom=config.csv_bom and not stdout,
        )
    except LyricsheetError as exc:
        _fail(exc)
        return
    _emit(data, fmt, output_path, _default_filename("export", fmt, album, song), stdout)


@main.command("template")
@_fields_option
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: template.<format>).")
@_format_option
@_stdout_option
@click.pass_obj
def template_command(
    config: ExchangeConfig,
    field_values: tuple[str, ...],
    output_path: str | None,
    fmt: str | None,
    stdout: bool,
) -> None:
    """Write an empty table with only the header row, ready to fill in."""
    fmt = _resolve_format(config, fmt, output_path, stdout)
    try:
        data = template(_parse_fields(field_values), fmt, bom=config.csv_bom and not stdout)
    except LyricsheetError as exc:
        _fail(exc)
        return
    _emit(data, fmt, output_path, _default_filename("template", fmt), stdout)


@main.command("fields")
def fields_command() -> None:
    """List the field ids accepted by --fields."""
    for field_id in FIELD_IDS:
        marker = " (required)" if field_id in REQUIRED_FIELDS else ""
        click.echo(f"{field_id:<20} {FIELD_LABELS[field_id]}{marker}")


@main.command("search")
@click.argument("query")
@_catalog_option
@click.option("--limit", default=MAX_RESULTS, show_default=True, type=click.IntRange(min=1),
              help="Stop after this many matches.")
@click.pass_obj
def search_command(config: ExchangeConfig, query: str, catalog_path: str | None, limit: int) -> None:
    """Find QUERY in song titles, lyrics, vocabulary and grammar notes."""
    try:
        catalog = load_catalog(catalog_path or config.catalog_path)
    except LyricsheetError as exc:
        _fail(exc)
        return
    hits = search_catalog(catalog, query, limit)
    if not hits:
        click.echo("No matches.")
        return
    for hit in hits:
        click.echo(f"{hit.album.title} / {hit.song.title} [{hit.where}] {hit.snippet}")


@main.command("extract-vocab")
@_catalog_option
@click.option("--album", default=None, help="Only this album.")
@click.option("--song", default=None, help="Only songs with this title.")
@click.option("--dry-run", is_flag=True, default=False,
              help="Report what would be added without saving the catalog.")
@click.pass_obj
def extract_vocab_command(
    config: ExchangeConfig,
    catalog_path: str | None,
    album: str | None,
    song: str | None,
    dry_run: bool,
) -> None:
    """Add the Korean words of each song's lyrics to its vocabulary list."""
    catalog_path = catalog_path or config.catalog_path
    try:
        catalog = load_catalog(catalog_path)
    except LyricsheetError as exc:
        _fail(exc)
        return

    songs = [
        s for a, s in catalog.iter_songs()
        if (album is None or title_key(a.title) == title_key(album))
        and (song is None or title_key(s.title) == title_key(song))
    ]
    if not songs:
        click.echo("Error: no matching songs", err=True)
        sys.exit(1)

    added = sum(extract_vocab(s) for s in songs)
    if not dry_run:
        save_catalog(catalog, catalog_path)
    click.echo(f"Added {added} word(s) across {len(songs)} song(s)")
