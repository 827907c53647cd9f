"""Authentication commands."""

import click

from stakk.cli.ensure import Ensure
from stakk.cli.output import machine_output
from stakk.core.context import StakkContext
from stakk.core.jj.remote import resolve_github_remote

AUTH_SETUP_TEXT = """\
stakk resolves GitHub authentication in this order:

  1. GitHub CLI:    Run `gh auth login` to authenticate.
                    This is the recommended method.

  2. GITHUB_TOKEN:  Set the GITHUB_TOKEN environment variable
                    to a personal access token with `repo` scope.

  3. GH_TOKEN:      Set the GH_TOKEN environment variable
                    (same as GITHUB_TOKEN, alternative name).

To verify: run `stakk auth test`"""


async def _check_auth(ctx: StakkContext) -> None:
    token = await ctx.token_resolver()
    machine_output(f"Authentication source: {token.source}")

    remotes = await ctx.jj.get_git_remote_list()
    _, repo = resolve_github_remote(remotes, None)
    forge = ctx.forge_factory(repo, token)

    username = await forge.get_authenticated_user()
    machine_output(f"Authenticated as: {username}")


@click.group("auth")
def auth_group() -> None:
    """Manage GitHub authentication."""


@auth_group.command("test")
@click.pass_obj
def auth_test_cmd(ctx: StakkContext) -> None:
    """Resolve a token and verify it against GitHub."""
    Ensure.completes(_check_auth(ctx))


@auth_group.command("setup")
def auth_setup_cmd() -> None:
    """Explain how stakk finds GitHub credentials."""
    machine_output(AUTH_SETUP_TEXT)
