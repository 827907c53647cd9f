"""Submit a bookmark and everything below it as stacked pull requests."""

from dataclasses import dataclass

import click

from stakk.cli.ensure import Ensure
from stakk.cli.output import machine_output, progress_status, user_output
from stakk.cli.prompt import choose_bookmark
from stakk.core.context import StakkContext
from stakk.core.github.abc import Forge
from stakk.core.jj.remote import resolve_github_remote
from stakk.core.user_feedback import SuppressedFeedback
from stakk.graph.builder import build_change_graph
from stakk.graph.types import ChangeGraph
from stakk.submit.analyze import analyze_submission
from stakk.submit.execute import execute_submission_plan
from stakk.submit.plan import create_submission_plan, format_submission_plan
from stakk.submit.types import SubmissionPlan, SubmissionResult


@dataclass(frozen=True)
class _Prepared:
    remote: str
    forge: Forge
    graph: ChangeGraph
    default_branch: str


async def _prepare(ctx: StakkContext, remote: str) -> _Prepared:
    token = await ctx.token_resolver()

    remotes = await ctx.jj.get_git_remote_list()
    remote_name, repo = resolve_github_remote(remotes, remote)
    forge = ctx.forge_factory(repo, token)

    graph = await build_change_graph(ctx.jj, trunk=ctx.global_config.trunk)
    default_branch = await ctx.jj.get_default_branch()

    return _Prepared(
        remote=remote_name, forge=forge, graph=graph, default_branch=default_branch
    )


async def _plan(prepared: _Prepared, bookmark: str, draft: bool) -> SubmissionPlan:
    analysis = analyze_submission(bookmark, prepared.graph, prepared.default_branch)
    return await create_submission_plan(analysis, prepared.forge, prepared.remote, draft=draft)


@click.command("submit")
@click.argument("bookmark", required=False)
@click.option("--dry-run", is_flag=True, help="Show what would be done without doing it.")
@click.option("--draft", is_flag=True, help="Create new PRs as drafts.")
@click.option("--remote", default=None, help="Git remote to push to (default: origin).")
@click.option("--quiet", "-q", is_flag=True, help="Only print the plan and errors.")
@click.pass_obj
def submit_cmd(
    ctx: StakkContext,
    bookmark: str | None,
    dry_run: bool,
    draft: bool,
    remote: str | None,
    quiet: bool,
) -> None:
    """Submit BOOKMARK and the bookmarks below it as stacked PRs.

    Each bookmark becomes one PR whose base is the bookmark below it (the
    bottom one targets the default branch). Existing PRs are reused and
    re-based; every PR gets a comment listing the whole stack.

    Without BOOKMARK, choose a stack and a bookmark interactively.
    """
    if quiet:
        ctx = ctx.with_feedback(SuppressedFeedback())
    config = ctx.global_config
    remote_name = remote if remote is not None else config.remote
    use_draft = draft or config.draft

    with progress_status("Building change graph..."):
        prepared = Ensure.completes(_prepare(ctx, remote_name))

    if bookmark is None:
        bookmark = choose_bookmark(prepared.graph)
        if bookmark is None:
            user_output("No bookmark stacks found.")
            return

    with progress_status("Checking for existing pull requests..."):
        plan = Ensure.completes(_plan(prepared, bookmark, use_draft))

    if dry_run:
        user_output("DRY RUN: no changes will be made.\n")
    machine_output(format_submission_plan(plan))

    if dry_run:
        return

    result: SubmissionResult = Ensure.completes(
        execute_submission_plan(plan, ctx.jj, prepared.forge, ctx.feedback)
    )
    ctx.feedback.success(f"\nSubmitted {len(result.stack_entries)} bookmark(s).")
