"""User-facing progress output with mode awareness."""

from abc import ABC, abstractmethod

import click

from stakk.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing progress output that's mode-aware.

    The submission executor reports each step through this channel instead of
    printing directly, so `--quiet` only has to pick an implementation.

    Two modes:
    - Interactive: Show all messages (info, success, errors)
    - Quiet: Suppress progress, only show errors

    Usage:
        ctx.feedback.info("Pushing bookmarks...")
        push_all()
        ctx.feedback.success("✓ Pushed 3 bookmarks")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message (suppressed in quiet mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message (suppressed in quiet mode)."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message (always shown, even in quiet mode)."""


class InteractiveFeedback(UserFeedback):
    """Feedback shown in interactive mode (all messages)."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))


class SuppressedFeedback(UserFeedback):
    """Feedback for quiet mode (only errors shown)."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))
