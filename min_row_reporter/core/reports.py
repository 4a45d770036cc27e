# min_row_reporter/core/reports.py
from __future__ import annotations
from typing import Iterable, Literal, TextIO
import csv, logging, math
import numpy as np
import pandas as pd

from .errors import IoError
from .model import ResultRecord

_LOG = logging.getLogger(__name__)

OutputFormat = Literal["csv", "space"]
OUTPUT_FORMATS: tuple[str, ...] = ("csv", "space")

def render_cell(value) -> str:
    """Text for one cell: '' for missing, no trailing '.0' on integral floats."""
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NA:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)

def render_row(row: pd.Series) -> tuple[str, ...]:
    return tuple(render_cell(v) for v in row.tolist())

def _fields(rec: ResultRecord, fmt: OutputFormat) -> list[str]:
    head = [rec.identifier, str(rec.row_number)]
    if fmt == "space":
        return head + [" ".join(rec.values)]
    return head + list(rec.values)

def write_results(records: Iterable[ResultRecord], sink: TextIO, fmt: OutputFormat = "csv") -> int:
    """
    Write one delimited line per record, in the order given. No header.
    - fmt="csv":   identifier,row_number,v1,...,vN
    - fmt="space": identifier,row_number,"v1 v2 ... vN"
    Returns the number of lines written. Lines already flushed stay on the
    sink if a later write fails.
    """
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"unknown output format: {fmt!r}")
    writer = csv.writer(sink, lineterminator="\n")
    n = 0
    try:
        for rec in records:
            writer.writerow(_fields(rec, fmt))
            n += 1
        sink.flush()
    except OSError as e:
        raise IoError(f"failed writing results after {n} line(s): {e}") from e
    _LOG.debug("wrote %d result line(s)", n)
    return n
