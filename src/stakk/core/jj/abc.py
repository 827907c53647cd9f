"""Abstract base class for jj operations."""

from abc import ABC, abstractmethod

from stakk.core.jj.types import Bookmark, GitRemote, LogEntry

# Maximum number of log entries returned by one paginated log query.
PAGE_SIZE = 100


class Jj(ABC):
    """Abstract interface for jj operations.

    All implementations (real and fake) must implement this interface.
    Implementations must tolerate concurrent overlapping calls.
    """

    @abstractmethod
    async def get_my_bookmarks(self) -> list[Bookmark]:
        """List local bookmarks authored by the current user.

        Trunk bookmarks and conflicted bookmarks are excluded.

        Raises:
            JjError: If the jj command fails or its output cannot be parsed
        """
        ...

    @abstractmethod
    async def get_branch_changes_paginated(
        self, trunk: str, to_ref: str, after: str | None
    ) -> list[LogEntry]:
        """Get one page of commits in `trunk..to_ref`, newest first.

        Args:
            trunk: Revset expression for trunk (e.g. "trunk()")
            to_ref: Commit id to walk back from
            after: Commit id of the last entry of the previous page. When given,
                   only strict ancestors of it are returned.

        Returns:
            Up to PAGE_SIZE log entries. Fewer means the range is exhausted.

        Raises:
            JjError: If the jj command fails or its output cannot be parsed
        """
        ...

    @abstractmethod
    async def get_default_branch(self) -> str:
        """Name of the first non-internal remote bookmark pointing at trunk.

        Raises:
            JjError: If no such bookmark exists or the command fails
        """
        ...

    @abstractmethod
    async def push_bookmark(self, name: str, remote: str) -> None:
        """Push a bookmark to a git remote. A no-op when already up to date.

        Raises:
            JjError: If the push fails
        """
        ...

    @abstractmethod
    async def get_git_remote_list(self) -> list[GitRemote]:
        """List the git remotes configured for the repository.

        Raises:
            JjError: If the jj command fails
        """
        ...
