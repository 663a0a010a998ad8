from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from cargo_clean_recursive.cargo import detect_and_clean, file_mode
from cargo_clean_recursive.config import Config, is_excluded
from cargo_clean_recursive.errors import CleanError, warn


@dataclass
class ScanStats:
    cleaned: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)


def _list_dir(path: Path) -> list[Path]:
    try:
        return list(path.iterdir())
    except OSError as e:
        raise CleanError(f"reading directory {os.path.realpath(path)}") from e


def _is_real_dir(path: Path) -> bool:
    try:
        mode = file_mode(path, follow_symlinks=False)
    except OSError as e:
        raise CleanError(f"reading file type of {path}") from e
    return mode is not None and stat.S_ISDIR(mode)


def walk(
    path: Path,
    depth: int,
    config: Config,
    stats: ScanStats | None = None,
) -> ScanStats:
    """Clean every Cargo build root under ``path``, at most ``depth`` levels deep.

    ``depth`` counts the node itself, so a depth of 0 visits nothing and a
    depth of 1 checks only ``path``. Failures in child subtrees are printed
    as warnings and recorded in ``stats.failed``; only failures at ``path``
    itself are raised.
    """
    if stats is None:
        stats = ScanStats()
    if depth == 0:
        return stats

    try:
        cleaned = detect_and_clean(path, config)
    except CleanError as e:
        raise CleanError(f"cleaning directory {path}") from e
    if cleaned:
        stats.cleaned.append(path)

    for child in _list_dir(path):
        if is_excluded(child.name, config.exclude_dirs):
            continue
        try:
            if _is_real_dir(child):
                walk(child, depth - 1, config, stats)
        except CleanError as e:
            warn(e)
            stats.failed.append(child)

    return stats
