import logging
import os

import click

from stakk.cli.commands.auth import auth_group
from stakk.cli.commands.show import show_cmd
from stakk.cli.commands.submit import submit_cmd
from stakk.cli.ensure import Ensure
from stakk.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if STAKK_DEBUG environment variable is set
if os.getenv("STAKK_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(package_name="stakk")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Submit Jujutsu bookmark stacks as GitHub stacked pull requests."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            Ensure.invariant(False, str(e))

    if ctx.invoked_subcommand is None:
        ctx.invoke(show_cmd)


cli.add_command(auth_group)
cli.add_command(show_cmd)
cli.add_command(submit_cmd)


def main() -> None:
    """CLI entry point used by the `stakk` console script."""
    cli()
