"""Production implementation of jj operations."""

from pathlib import Path

from stakk.core.errors import JjError
from stakk.core.jj.abc import PAGE_SIZE, Jj
from stakk.core.jj.parsing import (
    parse_bookmark_list,
    parse_default_branch,
    parse_git_remote_list,
    parse_log_entries,
)
from stakk.core.jj.types import Bookmark, GitRemote, LogEntry
from stakk.core.subprocess_utils import run_subprocess_with_context

# One JSON object per local bookmark; remote-tracking entries print nothing.
BOOKMARK_TEMPLATE = (
    "if(!remote, "
    "'{\"name\":' ++ json(name) ++ ',\"synced\":' ++ json(synced)"
    " ++ ',\"target\":' ++ json(normal_target) ++ '}' ++ \"\\n\")"
)

LOG_TEMPLATE = (
    "'{\"commit\":' ++ json(self)"
    " ++ ',\"local_bookmarks\":' ++ json(local_bookmarks)"
    " ++ ',\"remote_bookmarks\":' ++ json(remote_bookmarks)"
    " ++ '}' ++ \"\\n\""
)

TRUNK_BOOKMARKS_TEMPLATE = 'json(remote_bookmarks) ++ "\\n"'

MY_BOOKMARKS_REVSET = "mine() ~ trunk()"


class RealJj(Jj):
    """Production implementation using the jj CLI.

    All operations execute actual jj commands via async subprocess, with the
    pager disabled.
    """

    def __init__(self, repo_root: Path | None = None) -> None:
        """Initialize RealJj.

        Args:
            repo_root: Directory to run jj in (current directory when None)
        """
        self._repo_root = repo_root

    async def _run_jj(self, args: list[str], operation_context: str) -> str:
        cmd = ["jj", "--config", "ui.paginate=never", *args]
        try:
            return await run_subprocess_with_context(
                cmd, operation_context=operation_context, cwd=self._repo_root
            )
        except RuntimeError as e:
            raise JjError(str(e)) from e

    async def get_my_bookmarks(self) -> list[Bookmark]:
        stdout = await self._run_jj(
            ["bookmark", "list", "-r", MY_BOOKMARKS_REVSET, "-T", BOOKMARK_TEMPLATE],
            operation_context="list bookmarks",
        )
        return parse_bookmark_list(stdout)

    async def get_branch_changes_paginated(
        self, trunk: str, to_ref: str, after: str | None
    ) -> list[LogEntry]:
        if after is None:
            revset = f"{trunk}..{to_ref}"
        else:
            revset = f"{trunk}..{after}-"

        stdout = await self._run_jj(
            [
                "log",
                "--no-graph",
                "-r",
                revset,
                "--limit",
                str(PAGE_SIZE),
                "-T",
                LOG_TEMPLATE,
            ],
            operation_context=f"read log for {revset}",
        )
        return parse_log_entries(stdout)

    async def get_default_branch(self) -> str:
        stdout = await self._run_jj(
            ["log", "--no-graph", "-r", "trunk()", "--limit", "1", "-T", TRUNK_BOOKMARKS_TEMPLATE],
            operation_context="detect default branch",
        )
        branch = parse_default_branch(stdout)
        if branch is None:
            raise JjError("could not determine default branch: no remote bookmark at trunk()")
        return branch

    async def push_bookmark(self, name: str, remote: str) -> None:
        await self._run_jj(
            ["git", "push", "--bookmark", name, "--remote", remote, "--allow-new"],
            operation_context=f"push bookmark '{name}' to {remote}",
        )

    async def get_git_remote_list(self) -> list[GitRemote]:
        stdout = await self._run_jj(
            ["git", "remote", "list"],
            operation_context="list git remotes",
        )
        return parse_git_remote_list(stdout)
