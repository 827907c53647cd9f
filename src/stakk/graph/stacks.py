"""Assemble graph segments into linear stacks and order them."""

from collections import deque
from collections.abc import Collection, Mapping

from stakk.graph.types import BookmarkSegment, BranchStack, ChangeGraph


def group_segments_into_stacks(
    leaves: Collection[str],
    adjacency: Mapping[str, str],
    segments: Mapping[str, BookmarkSegment],
) -> list[BranchStack]:
    """Build one stack per leaf by walking parent edges down to its root.

    Leaves are processed in sorted order so the result is deterministic.
    Segments shared by several leaves appear in each of their stacks.
    """
    stacks: list[BranchStack] = []

    for leaf_id in sorted(leaves):
        path = [leaf_id]
        current = leaf_id
        while current in adjacency:
            current = adjacency[current]
            path.append(current)

        path.reverse()
        stacks.append(
            BranchStack(segments=tuple(segments[cid] for cid in path if cid in segments))
        )

    return stacks


def topological_sort(graph: ChangeGraph) -> list[str]:
    """Order change_ids leaves first, keeping each stack's members contiguous.

    Kahn's algorithm over the in-degree of each parent. A parent becomes ready
    once all its children are emitted, and is pushed to the front of the queue
    so it follows the child that released it.
    """
    in_degrees: dict[str, int] = {}
    for parent_id in graph.adjacency.values():
        in_degrees[parent_id] = in_degrees.get(parent_id, 0) + 1

    queue = deque(sorted(graph.leaves))
    result: list[str] = []

    while queue:
        change_id = queue.popleft()
        result.append(change_id)

        parent_id = graph.adjacency.get(change_id)
        if parent_id is None or parent_id not in in_degrees:
            continue
        in_degrees[parent_id] -= 1
        if in_degrees[parent_id] == 0:
            queue.appendleft(parent_id)

    return result
