"""Tests for RealGitHub command construction and error mapping.

The subprocess runner is replaced, so no gh process is started.
"""

import json

import pytest

from stakk.core.errors import ForgeAuthError, ForgeError
from stakk.core.github import real
from stakk.core.github.real import RealGitHub
from stakk.core.github.types import CreatePrParams


class _RecordingRunner:
    def __init__(self, *, stdout: str = "", error: str | None = None) -> None:
        self.stdout = stdout
        self.error = error
        self.calls: list[tuple[list[str], dict[str, str] | None]] = []

    async def __call__(self, cmd, operation_context, cwd=None, env=None) -> str:
        self.calls.append((list(cmd), env))
        if self.error is not None:
            raise RuntimeError(self.error)
        return self.stdout


def _pr_json(number: int, head: str, base: str) -> dict:
    return {
        "number": number,
        "html_url": f"https://github.com/owner/repo/pull/{number}",
        "title": "t",
        "state": "open",
        "merged_at": None,
        "head": {"ref": head},
        "base": {"ref": base},
    }


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> _RecordingRunner:
    recording = _RecordingRunner()
    monkeypatch.setattr(real, "run_subprocess_with_context", recording)
    return recording


async def test_find_pr_filters_by_owner_qualified_head(runner: _RecordingRunner) -> None:
    runner.stdout = json.dumps([_pr_json(5, "feature", "main")])

    pr = await RealGitHub("owner", "repo").find_pr_for_branch("feature")

    assert pr is not None
    assert pr.number == 5
    cmd, env = runner.calls[0]
    assert cmd[:2] == ["gh", "api"]
    assert "repos/owner/repo/pulls" in cmd
    assert "head=owner:feature" in cmd
    assert "state=open" in cmd
    assert env is None


async def test_find_pr_returns_none_when_no_open_pr(runner: _RecordingRunner) -> None:
    runner.stdout = "[]"

    assert await RealGitHub("owner", "repo").find_pr_for_branch("feature") is None


async def test_token_is_passed_as_gh_token(runner: _RecordingRunner) -> None:
    runner.stdout = "octocat\n"

    user = await RealGitHub("owner", "repo", token="secret").get_authenticated_user()

    assert user == "octocat"
    _, env = runner.calls[0]
    assert env is not None
    assert env["GH_TOKEN"] == "secret"


async def test_create_pr_sends_fields(runner: _RecordingRunner) -> None:
    runner.stdout = json.dumps(_pr_json(9, "feature", "base"))
    params = CreatePrParams(title="Title", head="feature", base="base", body="Body", draft=True)

    pr = await RealGitHub("owner", "repo").create_pr(params)

    assert pr.number == 9
    cmd, _ = runner.calls[0]
    assert ["-X", "POST"] == cmd[2:4]
    assert "title=Title" in cmd
    assert "head=feature" in cmd
    assert "base=base" in cmd
    assert "draft=true" in cmd
    assert "body=Body" in cmd


async def test_create_pr_omits_missing_body(runner: _RecordingRunner) -> None:
    runner.stdout = json.dumps(_pr_json(9, "feature", "main"))
    params = CreatePrParams(title="T", head="feature", base="main", body=None, draft=False)

    await RealGitHub("owner", "repo").create_pr(params)

    cmd, _ = runner.calls[0]
    assert "draft=false" in cmd
    assert not any(arg.startswith("body=") for arg in cmd)


async def test_update_pr_base_patches_pull(runner: _RecordingRunner) -> None:
    await RealGitHub("owner", "repo").update_pr_base(7, "main")

    cmd, _ = runner.calls[0]
    assert cmd[2:5] == ["-X", "PATCH", "repos/owner/repo/pulls/7"]
    assert "base=main" in cmd


async def test_list_comments_parses_paginated_lines(runner: _RecordingRunner) -> None:
    runner.stdout = '{"id":1,"body":"a"}\n{"id":2,"body":"b"}\n'

    comments = await RealGitHub("owner", "repo").list_comments(3)

    assert [c.id for c in comments] == [1, 2]
    cmd, _ = runner.calls[0]
    assert "--paginate" in cmd
    assert "repos/owner/repo/issues/3/comments" in cmd


async def test_auth_failure_maps_to_forge_auth_error(runner: _RecordingRunner) -> None:
    runner.error = "Failed to get authenticated user\nstderr: gh: Bad credentials (HTTP 401)"

    with pytest.raises(ForgeAuthError):
        await RealGitHub("owner", "repo").get_authenticated_user()


async def test_other_failures_map_to_forge_error(runner: _RecordingRunner) -> None:
    runner.error = "Failed to update comment\nstderr: gh: Not Found (HTTP 404)"

    with pytest.raises(ForgeError) as exc_info:
        await RealGitHub("owner", "repo").update_comment(1, "body")
    assert not isinstance(exc_info.value, ForgeAuthError)


async def test_invalid_json_is_a_forge_error(runner: _RecordingRunner) -> None:
    runner.stdout = "<html>"

    with pytest.raises(ForgeError, match="invalid JSON"):
        await RealGitHub("owner", "repo").create_comment(1, "body")
