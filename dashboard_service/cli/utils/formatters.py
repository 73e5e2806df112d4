"""Status lines printed by the ``dashboard`` commands.

Errors go to stderr so ``dashboard dummies list > out.txt`` keeps the
listing clean.
"""

import click


def _status(symbol: str, message: str, color: str, *, err: bool = False) -> None:
    click.secho(f"{symbol} {message}", fg=color, err=err)


def success(message: str) -> None:
    _status("✓", message, "green")


def error(message: str) -> None:
    _status("✗", message, "red", err=True)


def warning(message: str) -> None:
    _status("!", message, "yellow")


def info(message: str) -> None:
    _status("·", message, "blue")


def header(title: str) -> None:
    """Print ``title`` in bold after a blank line, e.g. above a listing."""
    click.secho(f"\n{title}", fg="cyan", bold=True)
