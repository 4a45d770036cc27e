# min_row_reporter/loaders/csv_loader.py
from __future__ import annotations
from pathlib import Path
import csv, io, logging
import pandas as pd

from ..core.errors import ParseError

_LOG = logging.getLogger(__name__)


def column_names(n: int) -> list[str]:
    return [f"column_{i}" for i in range(1, n + 1)]


def _field_count(text: str, delimiter: str, path: Path) -> int:
    """
    Width of the first non-blank row. Every other non-blank row must agree,
    otherwise the file is rejected (pandas silently pads short rows with NaN).
    """
    width = None
    try:
        for lineno, row in enumerate(csv.reader(io.StringIO(text), delimiter=delimiter), start=1):
            if not row:
                continue
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise ParseError(path, f"line {lineno} has {len(row)} field(s), expected {width}")
    except csv.Error as e:
        raise ParseError(path, f"cannot parse delimited content: {e}") from e
    return width or 0


def _read_text(path: Path) -> str:
    try:
        with path.open("rb") as f:
            raw = f.read()
    except OSError as e:
        raise ParseError(path, f"cannot read file: {e}") from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8: {e}") from e


def load(path: Path, delimiter: str = ",") -> pd.DataFrame:
    """
    Parse one header-less delimited file into a DataFrame.

    Columns are named column_1..column_N; dtypes are inferred per column
    (numeric when every cell parses, object otherwise). An empty file yields
    an empty frame with zero rows.
    """
    path = Path(path)
    text = _read_text(path)
    width = _field_count(text, delimiter, path)
    if width == 0:
        _LOG.debug("empty file: %s", path)
        return pd.DataFrame()

    try:
        df = pd.read_csv(io.StringIO(text), sep=delimiter, header=None,
                         names=column_names(width), skip_blank_lines=True)
    except (pd.errors.ParserError, ValueError) as e:
        raise ParseError(path, f"cannot parse delimited content: {e}") from e

    _LOG.debug("loaded %s: %d row(s) x %d column(s)", path, df.shape[0], df.shape[1])
    return df
