from __future__ import annotations

import stat
import subprocess
from pathlib import Path

import click

from cargo_clean_recursive.config import All, Config, DeleteMode
from cargo_clean_recursive.errors import CleanError

MANIFEST_NAME = "Cargo.toml"
TARGET_DIR = "target"


def file_mode(path: Path, *, follow_symlinks: bool = True) -> int | None:
    """Return the st_mode of ``path``, or None if it does not exist.

    Other stat failures, such as a permission error, are raised.
    """
    try:
        return path.stat(follow_symlinks=follow_symlinks).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None


def is_build_root(path: Path) -> bool:
    """A build root holds both a Cargo manifest and a target directory."""
    if file_mode(path / MANIFEST_NAME) is None:
        return False
    mode = file_mode(path / TARGET_DIR)
    return mode is not None and stat.S_ISDIR(mode)


def clean_commands(delete_mode: DeleteMode) -> list[list[str]]:
    """Return the cargo invocations a delete mode asks for, in order."""
    if isinstance(delete_mode, All):
        return [["cargo", "clean"]]

    commands = []
    if delete_mode.doc:
        commands.append(["cargo", "clean", "--doc"])
    if delete_mode.release:
        commands.append(["cargo", "clean", "--release"])
    return commands


def _run_cargo(cmd: list[str], cwd: Path, strict: bool) -> None:
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        raise CleanError(f"running {' '.join(cmd)!r}") from e

    if strict and result.returncode != 0:
        tail = result.stderr.strip().splitlines()[-1:] or ["no output"]
        raise CleanError(
            f"{' '.join(cmd)!r} exited with status {result.returncode}: {tail[0]}"
        )


def detect_and_clean(path: Path, config: Config) -> bool:
    """Run the configured cargo clean actions if ``path`` is a build root.

    Returns True when the directory was cleaned. Cargo's exit status is only
    checked when ``config.strict`` is set.
    """
    try:
        found = is_build_root(path)
    except OSError as e:
        raise CleanError(f"checking {path}") from e
    if not found:
        return False

    click.echo(f"Cleaning {click.style(str(path), bold=True)}", err=True)
    for cmd in clean_commands(config.delete_mode):
        _run_cargo(cmd, path, config.strict)
    return True
