"""Fake jj operations for testing.

FakeJj is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from stakk.core.errors import JjError
from stakk.core.jj.abc import PAGE_SIZE, Jj
from stakk.core.jj.types import Bookmark, GitRemote, LogEntry


class FakeJj(Jj):
    """In-memory fake implementation of jj operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.

    The commit graph is given as a flat list of LogEntry objects. Any parent id
    that is not itself in the list is treated as trunk (or an ancestor of it),
    so `trunk..X` is every listed commit reachable from X.
    """

    def __init__(
        self,
        *,
        bookmarks: list[Bookmark] | None = None,
        commits: list[LogEntry] | None = None,
        default_branch: str | None = "main",
        remotes: list[GitRemote] | None = None,
        push_failures: set[str] | None = None,
    ) -> None:
        """Create FakeJj with pre-configured state.

        Args:
            bookmarks: Bookmarks returned by get_my_bookmarks (in order)
            commits: All non-trunk commits of the repository
            default_branch: Name returned by get_default_branch (None raises JjError)
            remotes: Remotes returned by get_git_remote_list
            push_failures: Bookmark names whose push raises JjError
        """
        self._bookmarks = bookmarks or []
        self._commits = {entry.commit_id: entry for entry in commits or []}
        self._default_branch = default_branch
        self._remotes = remotes or []
        self._push_failures = push_failures or set()
        self._pushed_bookmarks: list[tuple[str, str]] = []
        self._log_calls: list[tuple[str, str, str | None]] = []

    @property
    def pushed_bookmarks(self) -> list[tuple[str, str]]:
        """Read-only access to successful pushes as (name, remote) tuples."""
        return list(self._pushed_bookmarks)

    @property
    def log_calls(self) -> list[tuple[str, str, str | None]]:
        """Read-only access to paginated log calls as (trunk, to_ref, after) tuples."""
        return list(self._log_calls)

    async def get_my_bookmarks(self) -> list[Bookmark]:
        return list(self._bookmarks)

    async def get_branch_changes_paginated(
        self, trunk: str, to_ref: str, after: str | None
    ) -> list[LogEntry]:
        self._log_calls.append((trunk, to_ref, after))
        ordered = self._ancestry_newest_first(to_ref)

        start = 0
        if after is not None:
            ids = [entry.commit_id for entry in ordered]
            if after not in ids:
                return []
            start = ids.index(after) + 1

        return ordered[start : start + PAGE_SIZE]

    async def get_default_branch(self) -> str:
        if self._default_branch is None:
            raise JjError("could not determine default branch: no remote bookmark at trunk()")
        return self._default_branch

    async def push_bookmark(self, name: str, remote: str) -> None:
        if name in self._push_failures:
            raise JjError(f"Failed to push bookmark '{name}' to {remote}")
        self._pushed_bookmarks.append((name, remote))

    async def get_git_remote_list(self) -> list[GitRemote]:
        return list(self._remotes)

    def _ancestry_newest_first(self, to_ref: str) -> list[LogEntry]:
        """Topologically order commits reachable from to_ref, children first."""
        reachable: dict[str, LogEntry] = {}
        stack = [to_ref]
        while stack:
            commit_id = stack.pop()
            if commit_id in reachable or commit_id not in self._commits:
                continue
            entry = self._commits[commit_id]
            reachable[commit_id] = entry
            stack.extend(entry.parents)

        pending_children = {commit_id: 0 for commit_id in reachable}
        for entry in reachable.values():
            for parent in entry.parents:
                if parent in pending_children:
                    pending_children[parent] += 1

        ordered: list[LogEntry] = []
        ready = [commit_id for commit_id, count in pending_children.items() if count == 0]
        while ready:
            entry = reachable[ready.pop(0)]
            ordered.append(entry)
            for parent in entry.parents:
                if parent not in pending_children:
                    continue
                pending_children[parent] -= 1
                if pending_children[parent] == 0:
                    ready.append(parent)
        return ordered
