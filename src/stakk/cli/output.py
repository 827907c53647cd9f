"""Output utilities for CLI commands with clear intent.

user_output is for human-readable messages and goes to stderr.
machine_output is for data meant to be piped or parsed and goes to stdout.
"""

from typing import Any

import click
from rich.console import Console
from rich.status import Status


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write structured or pipeable output to stdout."""
    click.echo(message, nl=nl)


def progress_status(message: str) -> Status:
    """Transient spinner on stderr, used as a context manager around slow work.

    Nothing is left behind on the terminal once the block exits, and nothing is
    drawn at all when stderr is not a terminal.
    """
    return Console(stderr=True).status(message)
