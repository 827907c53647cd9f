"""Tests for parsing jj's templated NDJSON output."""

import json

import pytest

from stakk.core.errors import JjError
from stakk.core.jj.parsing import (
    parse_bookmark_list,
    parse_default_branch,
    parse_git_remote_list,
    parse_log_entries,
)

_SIG = {"name": "Ada", "email": "ada@example.com", "timestamp": "2024-05-01T10:00:00+02:00"}


def _commit_json(commit_id: str, change_id: str, parents: list[str], description: str) -> dict:
    return {
        "commit_id": commit_id,
        "parents": parents,
        "change_id": change_id,
        "description": description,
        "author": _SIG,
        "committer": _SIG,
    }


def test_parse_bookmark_list_keeps_local_entries() -> None:
    stdout = "\n".join(
        [
            json.dumps(
                {
                    "name": "feature",
                    "synced": True,
                    "target": _commit_json("c1", "k1", ["c0"], "Add feature\n"),
                }
            ),
            json.dumps(
                {
                    "name": "feature",
                    "remote": "origin",
                    "synced": True,
                    "target": _commit_json("c1", "k1", ["c0"], "Add feature\n"),
                }
            ),
            json.dumps({"name": "conflicted", "synced": False, "target": None}),
        ]
    )

    bookmarks = parse_bookmark_list(stdout)

    assert len(bookmarks) == 1
    assert bookmarks[0].name == "feature"
    assert bookmarks[0].commit_id == "c1"
    assert bookmarks[0].change_id == "k1"
    assert bookmarks[0].synced is True


def test_parse_bookmark_list_empty_output() -> None:
    assert parse_bookmark_list("") == []
    assert parse_bookmark_list("\n\n") == []


def test_parse_bookmark_list_rejects_malformed_line() -> None:
    with pytest.raises(JjError, match="bookmark list"):
        parse_bookmark_list('{"name": "x"}')


def test_parse_log_entries_preserves_order_and_bookmarks() -> None:
    lines = [
        {
            "commit": _commit_json("c2", "k2", ["c1"], "Second\n\nDetails\n"),
            "local_bookmarks": [{"name": "top", "target": ["c2"]}],
            "remote_bookmarks": [
                {"name": "top", "remote": "origin", "target": ["c2"], "tracking_target": ["c2"]}
            ],
        },
        {
            "commit": _commit_json("c1", "k1", ["c0", "cx"], "First\n"),
            "local_bookmarks": [],
            "remote_bookmarks": [],
        },
    ]

    entries = parse_log_entries("\n".join(json.dumps(line) for line in lines))

    assert [e.commit_id for e in entries] == ["c2", "c1"]
    assert entries[0].local_bookmark_names == ["top"]
    assert entries[0].remote_bookmark_names == ["top"]
    assert entries[0].description == "Second\n\nDetails\n"
    assert entries[0].author.name == "Ada"
    assert entries[1].parents == ["c0", "cx"]


def test_parse_log_entries_rejects_malformed_line() -> None:
    with pytest.raises(JjError, match="log output"):
        parse_log_entries("not json")


def test_parse_default_branch_skips_git_remote() -> None:
    refs = [
        {"name": "main", "remote": "git", "target": ["c0"]},
        {"name": "main", "remote": "origin", "target": ["c0"], "tracking_target": ["c0"]},
    ]

    assert parse_default_branch(json.dumps(refs)) == "main"


def test_parse_default_branch_none_when_only_git_remote() -> None:
    refs = [{"name": "main", "remote": "git", "target": ["c0"]}]

    assert parse_default_branch(json.dumps(refs)) is None
    assert parse_default_branch("") is None


def test_parse_git_remote_list() -> None:
    stdout = "origin git@github.com:owner/repo.git\nupstream https://github.com/up/repo\n"

    remotes = parse_git_remote_list(stdout)

    assert [(r.name, r.url) for r in remotes] == [
        ("origin", "git@github.com:owner/repo.git"),
        ("upstream", "https://github.com/up/repo"),
    ]
