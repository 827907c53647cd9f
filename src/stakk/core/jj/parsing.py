"""Parsing utilities for jj templated JSON output.

RealJj asks jj to print one JSON object per line. The raw pydantic models
below mirror jj's `json()` template serialization; the parse functions turn
them into the frozen types used by the rest of stakk.
"""

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from stakk.core.errors import JjError
from stakk.core.jj.types import Bookmark, GitRemote, LogEntry, Signature


class SignatureRaw(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    email: str
    timestamp: str


class CommitDataRaw(BaseModel):
    """Commit data from jj's `json(self)` in commit context."""

    model_config = ConfigDict(extra="ignore")

    commit_id: str
    parents: list[str]
    change_id: str
    description: str
    author: SignatureRaw
    committer: SignatureRaw


class CommitRefRaw(BaseModel):
    """A bookmark reference as serialized in log entries.

    `remote` is absent for local bookmarks.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    target: list[str | None]
    remote: str | None = None
    tracking_target: list[str | None] | None = None


class LogEntryRaw(BaseModel):
    model_config = ConfigDict(extra="ignore")

    commit: CommitDataRaw
    local_bookmarks: list[CommitRefRaw]
    remote_bookmarks: list[CommitRefRaw]


class BookmarkEntryRaw(BaseModel):
    """One line of `jj bookmark list` with the stakk template.

    `target` is None when the bookmark is conflicted.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    synced: bool
    target: CommitDataRaw | None
    remote: str | None = None


_COMMIT_REFS = TypeAdapter(list[CommitRefRaw])

# Remote name jj uses for the colocated git repository's own refs.
INTERNAL_GIT_REMOTE = "git"


def _lines(stdout: str) -> list[str]:
    return [line for line in stdout.splitlines() if line.strip()]


def parse_bookmark_list(stdout: str) -> list[Bookmark]:
    """Parse NDJSON bookmark output into local, non-conflicted bookmarks.

    Raises:
        JjError: If any line is not a valid bookmark entry
    """
    bookmarks: list[Bookmark] = []
    for line in _lines(stdout):
        try:
            raw = BookmarkEntryRaw.model_validate_json(line)
        except ValidationError as e:
            raise JjError(f"failed to parse bookmark list output: {e}") from e

        if raw.remote is not None or raw.target is None:
            continue

        bookmarks.append(
            Bookmark(
                name=raw.name,
                commit_id=raw.target.commit_id,
                change_id=raw.target.change_id,
                synced=raw.synced,
            )
        )
    return bookmarks


def parse_log_entries(stdout: str) -> list[LogEntry]:
    """Parse NDJSON log output, preserving jj's newest-first order.

    Raises:
        JjError: If any line is not a valid log entry
    """
    entries: list[LogEntry] = []
    for line in _lines(stdout):
        try:
            raw = LogEntryRaw.model_validate_json(line)
        except ValidationError as e:
            raise JjError(f"failed to parse log output: {e}") from e

        commit = raw.commit
        entries.append(
            LogEntry(
                commit_id=commit.commit_id,
                change_id=commit.change_id,
                description=commit.description,
                parents=list(commit.parents),
                author=Signature(
                    name=commit.author.name,
                    email=commit.author.email,
                    timestamp=commit.author.timestamp,
                ),
                local_bookmark_names=[ref.name for ref in raw.local_bookmarks],
                remote_bookmark_names=[ref.name for ref in raw.remote_bookmarks],
            )
        )
    return entries


def parse_default_branch(stdout: str) -> str | None:
    """Pick the first remote bookmark not belonging to the internal git remote.

    Expects a single line holding `json(remote_bookmarks)` for trunk.
    Returns None if no usable remote bookmark is present.

    Raises:
        JjError: If the output is not a JSON list of bookmark references
    """
    for line in _lines(stdout):
        try:
            refs = _COMMIT_REFS.validate_json(line)
        except ValidationError as e:
            raise JjError(f"failed to parse trunk bookmarks: {e}") from e

        for ref in refs:
            if ref.remote is not None and ref.remote != INTERNAL_GIT_REMOTE:
                return ref.name
    return None


def parse_git_remote_list(stdout: str) -> list[GitRemote]:
    """Parse `jj git remote list` output (`<name> <url>` per line)."""
    remotes: list[GitRemote] = []
    for line in _lines(stdout):
        parts = line.split(maxsplit=1)
        if len(parts) != 2:
            continue
        remotes.append(GitRemote(name=parts[0], url=parts[1].strip()))
    return remotes
