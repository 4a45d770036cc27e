# min_row_reporter/core/errors.py
from __future__ import annotations
from pathlib import Path


class ReporterError(Exception):
    """Base class for every error the reporter raises on purpose."""


class IoError(ReporterError, OSError):
    """Filesystem or output-stream failure (missing root, broken pipe, ...)."""


class ConfigError(ReporterError, ValueError):
    """Invalid pipeline configuration (thread count, column index, format)."""


class ParseError(ReporterError, ValueError):
    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ColumnNotFoundError(ReporterError, LookupError):
    def __init__(self, column_index: int, n_columns: int):
        self.column_index = column_index
        self.n_columns = n_columns
        super().__init__(
            f"column index {column_index} out of range for table with {n_columns} column(s)"
        )


class EmptyTableError(ReporterError, ValueError):
    """Table has no data rows."""


class ColumnTypeError(ReporterError, TypeError):
    """Target column holds values that cannot be ordered numerically."""
