class LyricsheetError(Exception):
    """Base exception for lyricsheet."""


class MissingColumnsError(LyricsheetError):
    """Raised when a table lacks the columns needed to place its rows."""

    def __init__(self, missing: list[str], headers: list[str]):
        self.missing = missing
        self.headers = headers
        found = ", ".join(h for h in headers if h) or "(none)"
        super().__init__(
            f"Missing required column(s): {', '.join(missing)}. Headers found: {found}"
        )


class UnknownFieldError(LyricsheetError, ValueError):
    """Raised when an export or template asks for a field that does not exist."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Unknown field: {field_id}")


class UnsupportedFormatError(LyricsheetError):
    """Raised when no writer exists for the requested output format."""

    def __init__(self, fmt: str):
        self.fmt = fmt
        super().__init__(f"Unsupported output format: {fmt}")


class WorkbookError(LyricsheetError):
    """Raised when a spreadsheet package cannot be opened."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Could not read workbook {filename}: {reason}")


class SnapshotError(LyricsheetError):
    """Raised when a catalog snapshot file is unreadable."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load catalog {path}: {reason}")
