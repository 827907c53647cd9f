from stakk.graph.builder import build_change_graph, build_graph_from_bookmarks
from stakk.graph.stacks import group_segments_into_stacks, topological_sort
from stakk.graph.types import BookmarkSegment, BranchStack, ChangeGraph, SegmentCommit

__all__ = [
    "BookmarkSegment",
    "BranchStack",
    "ChangeGraph",
    "SegmentCommit",
    "build_change_graph",
    "build_graph_from_bookmarks",
    "group_segments_into_stacks",
    "topological_sort",
]
