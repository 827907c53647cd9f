"""Tests for `stakk auth`."""

from click.testing import CliRunner

from stakk.cli.cli import cli
from stakk.core.context import StakkContext
from stakk.core.github.fake import FakeGitHub
from stakk.core.jj.fake import FakeJj
from tests.test_utils.cli_context import GITHUB_REMOTE


def test_auth_test_reports_source_and_user() -> None:
    ctx = StakkContext.for_test(
        jj=FakeJj(remotes=[GITHUB_REMOTE]),
        forge=FakeGitHub(authenticated_user="octocat"),
    )

    result = CliRunner().invoke(cli, ["auth", "test"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Authentication source: GITHUB_TOKEN environment variable" in result.output
    assert "Authenticated as: octocat" in result.output


def test_auth_test_without_github_remote_fails() -> None:
    ctx = StakkContext.for_test(jj=FakeJj(remotes=[]))

    result = CliRunner().invoke(cli, ["auth", "test"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: no GitHub remote found" in result.output


def test_auth_setup_explains_resolution_order() -> None:
    result = CliRunner().invoke(cli, ["auth", "setup"], obj=StakkContext.for_test())

    assert result.exit_code == 0
    assert "1. GitHub CLI:" in result.output
    assert "3. GH_TOKEN:" in result.output
    assert "stakk auth test" in result.output
