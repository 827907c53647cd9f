"""Show repository status: default branch, remotes and bookmark stacks."""

from dataclasses import dataclass

import click

from stakk.cli.ensure import Ensure
from stakk.cli.json_schemas import RemoteInfo, SegmentInfo, ShowCommandResponse, StackInfo
from stakk.cli.output import machine_output, progress_status, user_output
from stakk.core.context import StakkContext
from stakk.core.jj.remote import parse_github_url
from stakk.core.jj.types import GitRemote
from stakk.graph.builder import build_change_graph
from stakk.graph.types import ChangeGraph
from stakk.select import collect_stack_choices


@dataclass(frozen=True)
class _Status:
    default_branch: str
    remotes: list[GitRemote]
    graph: ChangeGraph


async def _load_status(ctx: StakkContext) -> _Status:
    default_branch = await ctx.jj.get_default_branch()
    remotes = await ctx.jj.get_git_remote_list()
    graph = await build_change_graph(ctx.jj, trunk=ctx.global_config.trunk)
    return _Status(default_branch=default_branch, remotes=remotes, graph=graph)


def _build_response(status: _Status) -> ShowCommandResponse:
    remotes = []
    for remote in status.remotes:
        repo = parse_github_url(remote.url)
        remotes.append(
            RemoteInfo(
                name=remote.name,
                url=remote.url,
                github_repo=str(repo) if repo is not None else None,
            )
        )

    choices = collect_stack_choices(status.graph)
    stacks = [
        StackInfo(
            label=choice.label(),
            segments=[
                SegmentInfo(
                    bookmark_names=list(segment.bookmark_names),
                    change_id=segment.change_id,
                    commit_count=len(segment.commits),
                )
                for segment in status.graph.stacks[choice.stack_index].segments
            ],
        )
        for choice in choices
    ]

    return ShowCommandResponse(
        default_branch=status.default_branch,
        remotes=remotes,
        stacks=stacks,
        excluded_bookmark_count=status.graph.excluded_bookmark_count,
    )


def _print_status(status: _Status) -> None:
    machine_output(f"Default branch: {status.default_branch}")
    for remote in status.remotes:
        repo = parse_github_url(remote.url)
        github = f" ({repo})" if repo is not None else ""
        machine_output(f"Remote: {remote.name} {remote.url}{github}")

    graph = status.graph
    if not graph.stacks:
        machine_output("\nNo bookmark stacks found.")
        return

    choices = collect_stack_choices(graph)
    machine_output(f"\nStacks ({len(choices)} found):")
    for choice in choices:
        machine_output(f"  {choice.label()}")

    if graph.excluded_bookmark_count > 0:
        user_output(
            f"\n  ({graph.excluded_bookmark_count} bookmark(s) excluded due to merge commits)"
        )


@click.command("show")
@click.option("--json", "output_json", is_flag=True, help="Output status as JSON.")
@click.pass_obj
def show_cmd(ctx: StakkContext, output_json: bool) -> None:
    """Show the default branch, remotes and bookmark stacks.

    This is the default command when stakk runs without arguments.
    """
    if output_json:
        status = Ensure.completes(_load_status(ctx))
        machine_output(_build_response(status).model_dump_json(indent=2))
        return

    with progress_status("Loading repository status..."):
        status = Ensure.completes(_load_status(ctx))
    _print_status(status)
