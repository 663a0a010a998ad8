from __future__ import annotations

import sys
from pathlib import Path

import click

from cargo_clean_recursive.config import build_config, load_file_config, resolve_depth
from cargo_clean_recursive.walker import walk

CARGO_SUBCOMMAND = "clean-recursive"


@click.command()
@click.option("-d", "--doc", is_flag=True, help="Delete documents only (cargo clean --doc).")
@click.option("-r", "--release", is_flag=True, help="Delete the release target only (cargo clean --release).")
@click.option(
    "--depth",
    type=click.IntRange(min=0),
    default=None,
    help="Recursive search depth limit (default: 64).",
)
@click.option(
    "-p",
    "--path",
    "path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Target directory (default: current directory).",
)
@click.option(
    "-ed",
    "--exclude_dirs",
    "--exclude-dirs",
    "exclude_dirs",
    multiple=True,
    help="Space-separated directory name suffixes to skip. May be repeated.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat a non-zero exit from cargo as a failure.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .cargo-clean-recursive.yaml in the target directory).",
)
def cli(
    doc: bool,
    release: bool,
    depth: int | None,
    path: Path | None,
    exclude_dirs: tuple[str, ...],
    strict: bool,
    config_path: Path | None,
) -> None:
    """Run cargo clean in every Cargo project below a directory."""
    root = path or Path.cwd()
    file_config = load_file_config(root, config_path)
    if file_config.path is not None:
        click.echo(f"Using config {file_config.path}", err=True)
    config = build_config(
        file_config,
        doc=doc,
        release=release,
        exclude_dirs=exclude_dirs,
        strict=strict,
    )

    stats = walk(root, resolve_depth(file_config, depth), config)

    if stats.cleaned:
        click.echo(f"Cleaned {len(stats.cleaned)} project(s).")
    else:
        click.echo("Nothing to clean.")
    if stats.failed:
        click.echo(
            click.style(f"{len(stats.failed)} subtree(s) skipped with errors.", fg="yellow"),
            err=True,
        )


def main() -> None:
    """Entry point; accepts being called by cargo as ``cargo clean-recursive``."""
    args = sys.argv[1:]
    if args[:1] == [CARGO_SUBCOMMAND]:
        args = args[1:]
    cli.main(args=args, prog_name="cargo clean-recursive")
