"""CLI error handling utilities with styled output.

All errors use a red "Error:" prefix and exit with code 1.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, NoReturn, TypeVar

import click

from stakk.cli.output import user_output
from stakk.core.errors import StakkError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _fail(message: str) -> NoReturn:
    user_output(click.style("Error: ", fg="red") + message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            _fail(error_message)

    @staticmethod
    def completes(coro: Coroutine[Any, Any, T]) -> T:
        """Run a coroutine to completion, turning stakk errors into a styled exit.

        Raises:
            SystemExit: If the coroutine raises StakkError (with exit code 1)
        """
        try:
            return asyncio.run(coro)
        except StakkError as e:
            logger.debug("Command failed", exc_info=e)
            _fail(str(e))
