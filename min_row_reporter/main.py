# min_row_reporter/main.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging
import sys

import typer
from rich.console import Console
from rich.markup import escape

from min_row_reporter.core.config import config_from_mapping, load_config
from min_row_reporter.core.errors import ReporterError
from min_row_reporter.core.pipeline import Orchestrator
from min_row_reporter.utils.detect import TRACE

err_console = Console(stderr=True)
app = typer.Typer(help="Summarise the minimum-value row of every delimited file under a folder.",
                  add_completion=False)

logging.addLevelName(TRACE, "TRACE")

def _log_level(debug: int) -> int:
    if debug <= 0:
        return logging.INFO
    if debug == 1:
        return logging.DEBUG
    return TRACE

def _setup_logging(debug: int) -> None:
    logging.basicConfig(level=_log_level(debug), stream=sys.stderr,
                        format="[%(levelname)s] %(name)s: %(message)s")

@app.command()
def main(
    folder: Path = typer.Argument(..., help="Folder to scan for delimited files."),
    threads: Optional[int] = typer.Option(None, "--threads", "-t", min=1, help="Worker threads per stage [default: 2]"),
    max_files: Optional[int] = typer.Option(None, "--max-files", "-m", min=0, help="Maximum number of processed files"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Only search top-level entries starting with this prefix"),
    prefix_depth: Optional[int] = typer.Option(None, "--prefix-depth", min=1, help="Depth searched for prefix matches [default: 1]"),
    extension: Optional[str] = typer.Option(None, "--extension", "-e", help="Target file extension [default: csv]"),
    column_index: Optional[int] = typer.Option(None, "--column-index", "-c", min=0, help="0-based column to minimise [default: 2]"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", help="Input field delimiter [default: ,]"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output layout: csv or space [default: csv]"),
    strict: bool = typer.Option(False, "--strict", help="Abort on the first file that fails"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML file supplying defaults"),
    debug: int = typer.Option(0, "--debug", "-d", count=True, help="Turn debugging information on (repeat for trace)"),
) -> None:
    """Write '<stem>,<row>,<col1>,...' to stdout for every file that loads and reduces."""
    _setup_logging(debug)
    try:
        cfg = load_config(config) if config is not None else {}
        pipeline_cfg = config_from_mapping(
            cfg,
            threads=threads,
            max_files=max_files,
            prefix=prefix,
            prefix_depth=prefix_depth,
            extension=extension,
            column_index=column_index,
            delimiter=delimiter,
            output_format=output_format,
            strict=True if strict else None,
        )
        logging.getLogger(__name__).info("threads number: %d", pipeline_cfg.threads)
        Orchestrator(pipeline_cfg).run(folder, sink=sys.stdout)
    except ReporterError as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
