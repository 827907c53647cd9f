"""Select the part of a stack that a submission covers."""

from stakk.core.errors import BookmarkNotFoundError
from stakk.graph.types import ChangeGraph
from stakk.submit.types import SubmissionAnalysis


def analyze_submission(
    target: str, graph: ChangeGraph, default_branch: str
) -> SubmissionAnalysis:
    """Find the first stack containing `target` and slice it from trunk to target.

    When a segment is shared by several stacks the first stack (by sorted leaf)
    wins; the slice is the same in every stack that contains it.

    Raises:
        BookmarkNotFoundError: If no stack contains the bookmark
    """
    for stack in graph.stacks:
        for index, segment in enumerate(stack.segments):
            if target in segment.bookmark_names:
                return SubmissionAnalysis(
                    segments=stack.segments[: index + 1],
                    default_branch=default_branch,
                )

    raise BookmarkNotFoundError(target)
