"""Numbered two-step prompt: choose a stack, then a bookmark in it."""

import click

from stakk.cli.output import user_output
from stakk.graph.types import ChangeGraph
from stakk.select import collect_bookmark_choices, collect_stack_choices


def _choose(question: str, labels: list[str]) -> int:
    if len(labels) == 1:
        return 0

    for number, label in enumerate(labels, start=1):
        user_output(f"  {number}) {label}")
    picked = click.prompt(
        question, type=click.IntRange(1, len(labels)), default=1, err=True
    )
    return picked - 1


def choose_bookmark(graph: ChangeGraph) -> str | None:
    """Ask which bookmark to submit. Returns None if there is nothing to choose."""
    stack_choices = collect_stack_choices(graph)
    if not stack_choices:
        return None

    stack_index = _choose("Which stack?", [c.label() for c in stack_choices])
    stack = graph.stacks[stack_choices[stack_index].stack_index]

    bookmark_choices = collect_bookmark_choices(stack)
    if not bookmark_choices:
        return None
    picked = _choose(
        "Submit up to which bookmark?", [c.label() for c in bookmark_choices]
    )
    return bookmark_choices[picked].bookmark_name
