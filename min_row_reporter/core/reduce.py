# min_row_reporter/core/reduce.py
from __future__ import annotations
import logging
import pandas as pd

from .errors import ColumnNotFoundError, EmptyTableError, ColumnTypeError

_LOG = logging.getLogger(__name__)

DEFAULT_COLUMN_INDEX = 2   # third column

def _numeric_column(col: pd.Series) -> pd.Series:
    """Numeric view of 'col' in its native dtype (int64 stays int64)."""
    if pd.api.types.is_bool_dtype(col):
        raise ColumnTypeError(f"column {col.name!r} is boolean, expected numeric")
    if not pd.api.types.is_numeric_dtype(col):
        try:
            col = pd.to_numeric(col, errors="raise")
        except (ValueError, TypeError) as e:
            raise ColumnTypeError(f"column {col.name!r} is not numeric: {e}") from e
    return col

def find_min_row(table: pd.DataFrame, column_index: int = DEFAULT_COLUMN_INDEX) -> tuple[int, pd.Series]:
    """
    Arg-min over one column of a loaded table.

    Missing cells are ignored; among equal minima the lowest row index wins.
    Comparison happens in the column's own dtype, so integers beyond 2**53
    are ordered exactly. Returns the 0-based positional row index and the
    full row at that index as an object Series (cells keep their column type).
    """
    if table.shape[0] == 0:
        raise EmptyTableError("table has no rows")
    n_cols = table.shape[1]
    if column_index < 0 or column_index >= n_cols:
        raise ColumnNotFoundError(column_index, n_cols)

    col = _numeric_column(table.iloc[:, column_index])
    if col.isna().all():
        raise ColumnTypeError(f"column {table.columns[column_index]!r} has no numeric values")

    idx = int(col.argmin(skipna=True))
    _LOG.debug("arg-min of column %d at row %d (value=%s)", column_index, idx, col.iloc[idx])
    # a single-row object frame avoids the int -> float upcast of mixed rows
    row = table.iloc[[idx]].astype(object).iloc[0]
    return idx, row
