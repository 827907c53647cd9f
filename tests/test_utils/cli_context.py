"""Helpers for building a StakkContext for CLI tests."""

from stakk.core.context import StakkContext
from stakk.core.github.fake import FakeGitHub
from stakk.core.jj.fake import FakeJj
from stakk.core.jj.types import Bookmark, GitRemote, LogEntry

GITHUB_REMOTE = GitRemote(name="origin", url="git@github.com:owner/repo.git")


def repo_context(
    *,
    bookmarks: list[Bookmark] | None = None,
    commits: list[LogEntry] | None = None,
    github: FakeGitHub | None = None,
    remotes: list[GitRemote] | None = None,
    push_failures: set[str] | None = None,
) -> tuple[StakkContext, FakeJj, FakeGitHub]:
    """Context over a fake repository with a GitHub `origin` remote."""
    jj = FakeJj(
        bookmarks=bookmarks,
        commits=commits,
        remotes=remotes if remotes is not None else [GITHUB_REMOTE],
        push_failures=push_failures,
    )
    forge = github if github is not None else FakeGitHub()
    return StakkContext.for_test(jj=jj, forge=forge), jj, forge
