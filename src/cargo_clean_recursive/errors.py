from __future__ import annotations

import click


def format_chain(exc: BaseException) -> list[str]:
    """Return the messages along the ``__cause__`` chain, outermost first."""
    messages = []
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, click.ClickException):
            messages.append(current.format_message())
        else:
            messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return messages


class CleanError(click.ClickException):
    """A directory could not be read or cleaned."""

    def show(self, file=None) -> None:
        head, *causes = format_chain(self)
        click.echo(f"Error: {head}", file=file, err=True)
        for cause in causes:
            click.echo(f"\t< {cause}", file=file, err=True)


class ConfigError(CleanError):
    """The configuration file is missing, malformed or holds a bad value."""


def warn(exc: BaseException) -> None:
    """Print an absorbed failure and its causes to stderr."""
    head, *causes = format_chain(exc)
    click.echo(f"{click.style('Warn', fg='yellow', bold=True)}: {head}", err=True)
    for cause in causes:
        click.echo(f"\tat: {cause}", err=True)
