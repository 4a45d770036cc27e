# min_row_reporter/utils/detect.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import os

from ..core.errors import IoError, ConfigError

_LOG = logging.getLogger(__name__)
TRACE = 5


@dataclass(frozen=True)
class DiscoveryFilter:
    extension: str = "csv"          # compared case-sensitively, leading dot optional
    prefix: str | None = None       # top-level directory name prefix
    max_depth: int = 1              # how deep to look for prefix matches

    def __post_init__(self):
        ext = (self.extension or "").lstrip(".")
        if not ext:
            raise ConfigError("discovery extension must not be empty")
        if self.max_depth < 1:
            raise ConfigError(f"prefix max_depth must be >= 1, got {self.max_depth}")
        object.__setattr__(self, "extension", ext)
        if self.prefix == "":
            object.__setattr__(self, "prefix", None)

    @property
    def suffix(self) -> str:
        return "." + self.extension

    def matches(self, p: Path) -> bool:
        """Exact match on the final suffix: 'a.CSV' is not a '.csv' file."""
        return p.suffix == self.suffix


def _walk_files(root: Path, flt: DiscoveryFilter) -> list[Path]:
    found: list[Path] = []
    # os.walk drops unreadable directories silently (onerror=None)
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            p = Path(dirpath) / name
            if not flt.matches(p):
                continue
            # broken symlinks and other non-regular entries
            if not p.is_file():
                _LOG.log(TRACE, "skip non-regular entry %s", p)
                continue
            found.append(p)
    return found


def _prefixed_roots(root: Path, flt: DiscoveryFilter) -> list[Path]:
    """
    Collect entries under 'root' (down to flt.max_depth) whose name starts with
    flt.prefix. A matching directory becomes a sub-root and is not scanned any
    further for prefix matches; a matching file is returned as-is.
    """
    selected: list[Path] = []
    level = [root]
    for _depth in range(flt.max_depth):
        nxt: list[Path] = []
        for folder in level:
            try:
                entries = sorted(os.scandir(folder), key=lambda e: e.name)
            except OSError as e:
                _LOG.debug("cannot list %s: %s", folder, e)
                continue
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    continue
                p = Path(entry.path)
                if entry.name.startswith(flt.prefix):
                    _LOG.log(TRACE, "prefix match: %s", p)
                    selected.append(p)
                elif is_dir:
                    nxt.append(p)
        level = nxt
    return selected


def discover_paths(root: Path, flt: DiscoveryFilter | None = None) -> list[Path]:
    """
    Return every file under 'root' whose extension matches the filter.

    With flt.prefix set, only entries whose own name starts with the prefix
    (within flt.max_depth levels of root) are searched. Order is the walk
    order; callers that need determinism sort the result.
    """
    flt = flt or DiscoveryFilter()
    root = Path(root)
    if not root.exists():
        raise IoError(f"root path does not exist: {root}")
    if not root.is_dir():
        raise IoError(f"root path is not a directory: {root}")

    if flt.prefix is None:
        return _walk_files(root, flt)

    sub_roots = _prefixed_roots(root, flt)
    _LOG.info("collected %d entries with prefix %r", len(sub_roots), flt.prefix)

    paths: list[Path] = []
    for sub in sub_roots:
        if sub.is_dir() and not sub.is_symlink():
            paths.extend(_walk_files(sub, flt))
        elif sub.is_file() and flt.matches(sub):
            paths.append(sub)
    return paths
