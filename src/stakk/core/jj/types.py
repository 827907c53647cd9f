"""Type definitions for jj operations."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Signature:
    """Author or committer signature of a commit."""

    name: str
    email: str
    timestamp: str


@dataclass(frozen=True)
class Bookmark:
    """A local bookmark owned by the current user."""

    name: str
    commit_id: str
    change_id: str
    synced: bool


@dataclass(frozen=True)
class LogEntry:
    """One commit from `jj log`, with the bookmarks pointing at it."""

    commit_id: str
    change_id: str
    description: str
    parents: list[str]
    author: Signature
    local_bookmark_names: list[str] = field(default_factory=list)
    remote_bookmark_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GitRemote:
    """A git remote as listed by `jj git remote list`."""

    name: str
    url: str
