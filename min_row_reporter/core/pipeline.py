# min_row_reporter/core/pipeline.py
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, TextIO, TypeVar
import logging, sys, time
import pandas as pd

from .config import PipelineConfig
from .errors import ReporterError
from .model import FileFailure, ResultRecord, RunSummary, Stage
from .reduce import find_min_row
from .reports import render_row, write_results
from ..loaders import csv_loader
from ..utils.detect import discover_paths

_LOG = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

def _attempt(fn: Callable[[T], R], arg: T) -> R | ReporterError:
    try:
        return fn(arg)
    except ReporterError as e:
        return e


class Orchestrator:
    """
    discover -> sort -> truncate -> parallel load -> parallel reduce -> write.

    Each stage finishes completely before the next starts. Executor.map keeps
    input order, so the written records follow the sorted path order.

    Lenient (default): a per-file ReporterError is logged, recorded as a
    FileFailure and the file is left out of the output.
    Strict: the first failure (in input order) of a stage is raised and
    nothing is written.
    """

    def __init__(self, config: PipelineConfig | None = None):
        self.config = config or PipelineConfig()

    # ---------- stages ----------
    def collect_paths(self, root: Path) -> tuple[list[Path], int]:
        _LOG.info("collect .%s paths from folder: %s", self.config.discovery.extension, root)
        paths = sorted(discover_paths(Path(root), self.config.discovery), key=str)
        found = len(paths)
        _LOG.info("found %d .%s file(s)", found, self.config.discovery.extension)
        if self.config.max_files is not None and found > self.config.max_files:
            _LOG.info("truncate file list to: %d file(s)", self.config.max_files)
            paths = paths[: self.config.max_files]
        return paths, found

    def _load(self, path: Path) -> pd.DataFrame:
        return csv_loader.load(path, delimiter=self.config.delimiter)

    def _reduce(self, table: pd.DataFrame) -> tuple[int, pd.Series]:
        return find_min_row(table, self.config.column_index)

    def _parallel(self, stage: Stage, fn: Callable[[T], R], items: list[tuple[Path, T]],
                  summary: RunSummary) -> list[tuple[Path, R]]:
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=self.config.threads,
                                thread_name_prefix=f"minrow-{stage}") as pool:
            outcomes = list(pool.map(lambda a: _attempt(fn, a), [arg for _, arg in items]))

        ok: list[tuple[Path, R]] = []
        for (path, _), out in zip(items, outcomes):
            if isinstance(out, ReporterError):
                if self.config.strict:
                    _LOG.error("%s failed for %s: %s (strict mode, aborting)", stage, path, out)
                    raise out
                _LOG.error("%s failed for %s: %s", stage, path, out)
                summary.failures.append(FileFailure(source_path=path, stage=stage, error=out))
                continue
            ok.append((path, out))
        return ok

    # ---------- public ----------
    def process(self, paths: list[Path]) -> RunSummary:
        """Load and reduce 'paths' (already ordered); no output is written."""
        summary = RunSummary(discovered=len(paths))
        tables = self._parallel("load", self._load, [(p, p) for p in paths], summary)
        reduced = self._parallel("reduce", self._reduce, tables, summary)
        del tables

        for path, (row_index, row) in reduced:
            summary.records.append(ResultRecord(
                identifier=path.stem,
                row_number=row_index + 1,
                values=render_row(row),
                source_path=path,
            ))
        _LOG.info("found %d result(s), %d failure(s)", len(summary.records), len(summary.failures))
        return summary

    def run(self, root: Path, sink: TextIO | None = None) -> RunSummary:
        start = time.perf_counter()
        paths, found = self.collect_paths(root)
        summary = self.process(paths)
        summary.discovered = found
        write_results(summary.records, sink if sink is not None else sys.stdout,
                      fmt=self.config.output_format)
        summary.elapsed_s = time.perf_counter() - start
        _LOG.info("elapsed time: %.2fs", summary.elapsed_s)
        return summary
