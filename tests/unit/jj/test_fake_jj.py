"""Tests for FakeJj log pagination and push tracking."""

import pytest

from stakk.core.errors import JjError
from stakk.core.jj.fake import FakeJj
from tests.test_utils.builders import commit, linear_commits


async def test_log_is_newest_first_and_stops_at_trunk() -> None:
    jj = FakeJj(commits=linear_commits(["a", "b", "c"]))

    entries = await jj.get_branch_changes_paginated("trunk()", "c_c", None)

    assert [e.commit_id for e in entries] == ["c_c", "c_b", "c_a"]


async def test_log_cursor_returns_strict_ancestors() -> None:
    jj = FakeJj(commits=linear_commits(["a", "b", "c"]))

    entries = await jj.get_branch_changes_paginated("trunk()", "c_c", "c_b")

    assert [e.commit_id for e in entries] == ["c_a"]


async def test_log_excludes_unrelated_branches() -> None:
    commits = [
        commit("a"),
        commit("b", parents=["c_a"]),
        commit("x", parents=["c_a"]),
    ]
    jj = FakeJj(commits=commits)

    entries = await jj.get_branch_changes_paginated("trunk()", "c_b", None)

    assert [e.commit_id for e in entries] == ["c_b", "c_a"]


async def test_push_tracking_and_failures() -> None:
    jj = FakeJj(push_failures={"broken"})

    await jj.push_bookmark("ok", "origin")
    with pytest.raises(JjError):
        await jj.push_bookmark("broken", "origin")

    assert jj.pushed_bookmarks == [("ok", "origin")]


async def test_missing_default_branch_raises() -> None:
    with pytest.raises(JjError):
        await FakeJj(default_branch=None).get_default_branch()
