# min_row_reporter/core/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import yaml

from .errors import ConfigError, IoError
from .reduce import DEFAULT_COLUMN_INDEX
from .reports import OUTPUT_FORMATS
from ..utils.detect import DiscoveryFilter

@dataclass(frozen=True)
class PipelineConfig:
    discovery: DiscoveryFilter = field(default_factory=DiscoveryFilter)
    threads: int = 2
    max_files: int | None = None
    column_index: int = DEFAULT_COLUMN_INDEX
    delimiter: str = ","
    output_format: str = "csv"
    strict: bool = False

    def __post_init__(self):
        if self.threads < 1:
            raise ConfigError(f"threads must be >= 1, got {self.threads}")
        if self.max_files is not None and self.max_files < 0:
            raise ConfigError(f"max_files must be >= 0, got {self.max_files}")
        if self.column_index < 0:
            raise ConfigError(f"column_index must be >= 0, got {self.column_index}")
        if len(self.delimiter) != 1:
            raise ConfigError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output format must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output_format!r}"
            )

def load_config(cfg_path: Path) -> dict:
    try:
        with Path(cfg_path).open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except OSError as e:
        raise IoError(f"cannot read config {cfg_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {cfg_path}: {e}") from e
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{cfg_path}: top level must be a mapping")
    return cfg

def _pick(override, section: dict, key: str, default):
    if override is not None:
        return override
    value = section.get(key)
    return default if value is None else value

def _section(cfg: dict, name: str) -> dict:
    value = cfg.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"config section {name!r} must be a mapping, got {type(value).__name__}")
    return value

def config_from_mapping(cfg: dict | None, **overrides) -> PipelineConfig:
    """
    Build a PipelineConfig from the nested YAML layout:

        input:      {extension, prefix, prefix_depth, max_files, delimiter}
        processing: {threads, column_index, strict}
        output:     {format}

    Keyword overrides (CLI flags) win over YAML; None means "not given".
    """
    cfg = cfg or {}
    inp = _section(cfg, "input")
    proc = _section(cfg, "processing")
    out = _section(cfg, "output")
    ov = overrides.get

    strict = _pick(ov("strict"), proc, "strict", False)
    if not isinstance(strict, bool):
        raise ConfigError(f"strict must be true or false, got {strict!r}")
    prefix = _pick(ov("prefix"), inp, "prefix", None)
    try:
        flt = DiscoveryFilter(
            extension=str(_pick(ov("extension"), inp, "extension", "csv")),
            prefix=None if prefix is None else str(prefix),
            max_depth=int(_pick(ov("prefix_depth"), inp, "prefix_depth", 1)),
        )
        max_files = _pick(ov("max_files"), inp, "max_files", None)
        return PipelineConfig(
            discovery=flt,
            threads=int(_pick(ov("threads"), proc, "threads", 2)),
            max_files=None if max_files is None else int(max_files),
            column_index=int(_pick(ov("column_index"), proc, "column_index", DEFAULT_COLUMN_INDEX)),
            delimiter=str(_pick(ov("delimiter"), inp, "delimiter", ",")),
            output_format=str(_pick(ov("output_format"), out, "format", "csv")).lower(),
            strict=strict,
        )
    except (TypeError, ValueError) as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"invalid configuration value: {e}") from e
