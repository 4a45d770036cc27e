# min_row_reporter/core/model.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

Stage = Literal["load", "reduce"]

@dataclass(frozen=True)
class ResultRecord:
    identifier: str            # file stem, e.g. "a" for ".../a.csv"
    row_number: int            # 1-based index of the selected row
    values: tuple[str, ...]    # selected row, every cell rendered as text
    source_path: Path

@dataclass(frozen=True)
class FileFailure:
    source_path: Path
    stage: Stage
    error: Exception

@dataclass
class RunSummary:
    records: list[ResultRecord] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    discovered: int = 0        # before max_files truncation
    elapsed_s: float = 0.0
