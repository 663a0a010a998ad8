from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union

import yaml

from cargo_clean_recursive.errors import ConfigError

DEFAULT_DEPTH = 64
CONFIG_FILENAME = ".cargo-clean-recursive.yaml"
CONFIG_KEYS = {"depth", "exclude_dirs", "strict"}


@dataclass(frozen=True)
class All:
    """Run ``cargo clean`` with no restriction."""


@dataclass(frozen=True)
class Partial:
    """Run only the selected clean actions; both off is a valid no-op."""

    doc: bool = False
    release: bool = False


DeleteMode = Union[All, Partial]


@dataclass(frozen=True)
class Config:
    exclude_dirs: frozenset[str] = frozenset()
    delete_mode: DeleteMode = All()
    strict: bool = False  # treat a non-zero cargo exit as a failure


@dataclass
class FileConfig:
    """Values read from a config file; ``None`` means not set there."""

    path: Path | None = None
    depth: int | None = None
    exclude_dirs: list[str] = field(default_factory=list)
    strict: bool | None = None


def delete_mode_from_flags(doc: bool, release: bool) -> DeleteMode:
    if not doc and not release:
        return All()
    return Partial(doc=doc, release=release)


def parse_exclude_dirs(values: Iterable[str]) -> frozenset[str]:
    """Split whitespace-separated exclusion lists into a set of name suffixes."""
    names: set[str] = set()
    for value in values:
        names.update(value.split())
    return frozenset(names)


def is_excluded(name: str, exclude_dirs: Iterable[str]) -> bool:
    """True if the directory name ends with any of the excluded suffixes."""
    return any(name.endswith(suffix) for suffix in exclude_dirs)


def load_file_config(root: Path, config_path: Path | None = None) -> FileConfig:
    """Load the config file given explicitly, or the one found in ``root``.

    A missing file in ``root`` is not an error; defaults are returned.
    """
    path = config_path or root / CONFIG_FILENAME
    if config_path is None:
        try:
            found = path.is_file()
        except OSError as e:
            raise ConfigError(f"checking for config file {path}") from e
        if not found:
            return FileConfig()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"reading config file {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"parsing config file {path}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    unknown = set(raw) - CONFIG_KEYS
    if unknown:
        raise ConfigError(f"{path}: unknown keys: {', '.join(sorted(unknown))}")

    depth = raw.get("depth")
    if depth is not None and (
        isinstance(depth, bool) or not isinstance(depth, int) or depth < 0
    ):
        raise ConfigError(f"{path}: 'depth' must be a non-negative integer, got {depth!r}")

    exclude_raw = raw.get("exclude_dirs") or []
    if isinstance(exclude_raw, str):
        exclude_raw = [exclude_raw]
    if not isinstance(exclude_raw, list) or not all(isinstance(e, str) for e in exclude_raw):
        raise ConfigError(f"{path}: 'exclude_dirs' must be a string or a list of strings")

    strict = raw.get("strict")
    if strict is not None and not isinstance(strict, bool):
        raise ConfigError(f"{path}: 'strict' must be true or false, got {strict!r}")

    return FileConfig(path=path, depth=depth, exclude_dirs=exclude_raw, strict=strict)


def build_config(
    file_config: FileConfig,
    *,
    doc: bool = False,
    release: bool = False,
    exclude_dirs: Iterable[str] = (),
    strict: bool = False,
) -> Config:
    """Combine command-line values with the config file; flags win."""
    return Config(
        exclude_dirs=parse_exclude_dirs([*file_config.exclude_dirs, *exclude_dirs]),
        delete_mode=delete_mode_from_flags(doc, release),
        strict=strict or bool(file_config.strict),
    )


def resolve_depth(file_config: FileConfig, depth: int | None) -> int:
    if depth is not None:
        return depth
    if file_config.depth is not None:
        return file_config.depth
    return DEFAULT_DEPTH
