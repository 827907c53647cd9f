"""Display rows for choosing a stack, then a bookmark within it.

The rows are plain data with a `label()` for rendering; the numbered prompt
that consumes them lives in the CLI.
"""

from dataclasses import dataclass

from stakk.graph.types import BookmarkSegment, BranchStack, ChangeGraph

UNNAMED = "(unnamed)"
NO_DESCRIPTION = "(no description)"


def _name(segment: BookmarkSegment) -> str:
    return segment.primary_name or UNNAMED


def _summary(description: str) -> str:
    lines = description.splitlines()
    first = lines[0].strip() if lines else ""
    return first or NO_DESCRIPTION


@dataclass(frozen=True)
class StackChoice:
    """One stack rendered as a single line.

    Attributes:
        stack_index: Index into ChangeGraph.stacks
        bookmark_names: Primary names, trunk to leaf
        commit_count: Commits across all segments
        shared_with: (bookmark, leaf names of the other stacks that contain it)
        leaf_summary: First line of the leaf's newest commit
    """

    stack_index: int
    bookmark_names: tuple[str, ...]
    commit_count: int
    shared_with: tuple[tuple[str, tuple[str, ...]], ...]
    leaf_summary: str

    def label(self) -> str:
        chain = " ← ".join(self.bookmark_names)
        pr_count = len(self.bookmark_names)
        if pr_count == 1:
            text = f"○ ← {chain}  (1 PR: {self.leaf_summary})"
        else:
            text = f"○ ← {chain}  ({pr_count} PRs)"

        for name, others in self.shared_with:
            text += f"  [{name} also in {', '.join(others)}]"
        return text


@dataclass(frozen=True)
class BookmarkChoice:
    """One bookmark of a stack, with the commits submitting it would include."""

    bookmark_name: str
    segment_index: int
    stack_len: int
    commit_summaries: tuple[str, ...]

    def label(self) -> str:
        if self.stack_len <= 1:
            position = ""
        elif self.segment_index == self.stack_len - 1:
            position = "leaf, "
        elif self.segment_index == 0:
            position = "base, "
        else:
            position = ""

        count = len(self.commit_summaries)
        commit_label = "commit" if count == 1 else "commits"
        pr_count = self.segment_index + 1
        pr_label = "PR" if pr_count == 1 else "PRs"

        lines = [f"{self.bookmark_name} ({position}{count} {commit_label}) → {pr_count} {pr_label}"]
        lines.extend(f"    {summary}" for summary in self.commit_summaries)
        return "\n".join(lines)


def collect_stack_choices(graph: ChangeGraph) -> list[StackChoice]:
    """Build one row per stack, noting segments that appear in other stacks."""
    stacks_by_change: dict[str, list[int]] = {}
    for stack_index, stack in enumerate(graph.stacks):
        for segment in stack.segments:
            stacks_by_change.setdefault(segment.change_id, []).append(stack_index)

    leaf_names = [_name(stack.leaf) if stack.leaf else UNNAMED for stack in graph.stacks]

    choices: list[StackChoice] = []
    for stack_index, stack in enumerate(graph.stacks):
        shared_with: list[tuple[str, tuple[str, ...]]] = []
        for segment in stack.segments:
            others = tuple(
                leaf_names[i] for i in stacks_by_change[segment.change_id] if i != stack_index
            )
            if others:
                shared_with.append((_name(segment), others))

        leaf = stack.leaf
        if leaf is not None and leaf.commits:
            leaf_summary = _summary(leaf.commits[0].description)
        else:
            leaf_summary = NO_DESCRIPTION

        choices.append(
            StackChoice(
                stack_index=stack_index,
                bookmark_names=tuple(_name(s) for s in stack.segments),
                commit_count=sum(len(s.commits) for s in stack.segments),
                shared_with=tuple(shared_with),
                leaf_summary=leaf_summary,
            )
        )
    return choices


def collect_bookmark_choices(stack: BranchStack) -> list[BookmarkChoice]:
    """Build one row per bookmark of a stack, leaf first."""
    stack_len = len(stack.segments)
    return [
        BookmarkChoice(
            bookmark_name=_name(segment),
            segment_index=index,
            stack_len=stack_len,
            commit_summaries=tuple(_summary(c.description) for c in segment.commits),
        )
        for index, segment in reversed(list(enumerate(stack.segments)))
    ]
