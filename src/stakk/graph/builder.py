"""Build the bookmark change graph from paginated jj log queries.

For each of the user's bookmarks the builder walks from the bookmark's commit
back toward trunk, splitting the walk into segments at every commit that
carries one of the user's bookmarks. Walks stop early when they reach a
bookmark an earlier walk already collected, which links the new segments onto
the existing ones. Any walk that meets a merge commit, or a change already
tainted by one, is abandoned and its bookmark excluded.
"""

import logging
from dataclasses import dataclass, field

from stakk.core.errors import GraphIntegrityError
from stakk.core.jj.abc import PAGE_SIZE, Jj
from stakk.core.jj.types import Bookmark
from stakk.graph.stacks import group_segments_into_stacks
from stakk.graph.types import BookmarkSegment, ChangeGraph, SegmentCommit

logger = logging.getLogger(__name__)

DEFAULT_TRUNK = "trunk()"


@dataclass
class _BuildState:
    """Accumulators shared by every traversal of one build."""

    user_bookmark_names: frozenset[str]
    fully_collected: set[str] = field(default_factory=set)
    tainted_change_ids: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class _TraversalResult:
    segments: list[BookmarkSegment]
    already_seen_change_id: str | None
    excluded: bool


@dataclass
class _OpenSegment:
    bookmark_names: tuple[str, ...]
    change_id: str
    commits: list[SegmentCommit] = field(default_factory=list)

    def close(self) -> BookmarkSegment:
        return BookmarkSegment(
            bookmark_names=self.bookmark_names,
            change_id=self.change_id,
            commits=tuple(self.commits),
        )


_EXCLUDED = _TraversalResult(segments=[], already_seen_change_id=None, excluded=True)


async def build_change_graph(jj: Jj, *, trunk: str = DEFAULT_TRUNK) -> ChangeGraph:
    """Build the change graph for all bookmarks owned by the current user.

    Raises:
        JjError: If a jj query fails
        GraphIntegrityError: If the log output cannot be split into segments
    """
    bookmarks = await jj.get_my_bookmarks()
    return await build_graph_from_bookmarks(bookmarks, jj, trunk=trunk)


async def build_graph_from_bookmarks(
    bookmarks: list[Bookmark], jj: Jj, *, trunk: str = DEFAULT_TRUNK
) -> ChangeGraph:
    """Build the change graph starting from an explicit bookmark list.

    Bookmarks are traversed in the given order. Only names in `bookmarks` start
    segments; any other bookmark in the log is treated as a plain commit.
    """
    state = _BuildState(user_bookmark_names=frozenset(b.name for b in bookmarks))
    adjacency: dict[str, str] = {}
    segments: dict[str, BookmarkSegment] = {}
    roots: set[str] = set()
    excluded_bookmark_count = 0

    for bookmark in bookmarks:
        if bookmark.name in state.fully_collected:
            continue

        result = await _traverse(bookmark, jj, trunk, state)

        if result.excluded:
            excluded_bookmark_count += 1
            logger.debug("Excluded bookmark '%s': merge commit in its history", bookmark.name)
            continue

        for segment in result.segments:
            state.fully_collected.update(segment.bookmark_names)

        for child, parent in zip(result.segments, result.segments[1:]):
            adjacency[child.change_id] = parent.change_id

        if result.segments:
            last = result.segments[-1]
            if result.already_seen_change_id is not None:
                adjacency[last.change_id] = result.already_seen_change_id
            else:
                roots.add(last.change_id)

        for segment in result.segments:
            segments[segment.change_id] = segment

    parent_ids = set(adjacency.values())
    leaves = frozenset(cid for cid in segments if cid not in parent_ids)
    stacks = group_segments_into_stacks(leaves, adjacency, segments)

    logger.debug(
        "Built change graph: %d segments, %d stacks, %d excluded",
        len(segments),
        len(stacks),
        excluded_bookmark_count,
    )

    return ChangeGraph(
        adjacency=adjacency,
        leaves=leaves,
        roots=frozenset(roots),
        segments=segments,
        tainted_change_ids=frozenset(state.tainted_change_ids),
        excluded_bookmark_count=excluded_bookmark_count,
        stacks=tuple(stacks),
    )


async def _traverse(
    bookmark: Bookmark, jj: Jj, trunk: str, state: _BuildState
) -> _TraversalResult:
    """Walk from one bookmark toward trunk, splitting commits into segments."""
    logger.debug("Traversing from bookmark '%s' (%s)", bookmark.name, bookmark.commit_id)

    closed: list[BookmarkSegment] = []
    current: _OpenSegment | None = None
    seen_change_ids: list[str] = []
    after: str | None = None

    while True:
        changes = await jj.get_branch_changes_paginated(trunk, bookmark.commit_id, after)
        if not changes:
            break

        for change in changes:
            seen_change_ids.append(change.change_id)

            if len(change.parents) > 1 or change.change_id in state.tainted_change_ids:
                state.tainted_change_ids.update(seen_change_ids)
                return _EXCLUDED

            owned = tuple(
                name for name in change.local_bookmark_names if name in state.user_bookmark_names
            )
            if owned:
                if current is not None:
                    closed.append(current.close())
                    current = None

                if any(name in state.fully_collected for name in owned):
                    return _TraversalResult(
                        segments=closed,
                        already_seen_change_id=change.change_id,
                        excluded=False,
                    )

                current = _OpenSegment(bookmark_names=owned, change_id=change.change_id)

            if current is None:
                raise GraphIntegrityError(
                    f"encountered change {change.change_id} before any bookmark "
                    f"while traversing from bookmark '{bookmark.name}'"
                )

            current.commits.append(
                SegmentCommit(
                    commit_id=change.commit_id,
                    change_id=change.change_id,
                    description=change.description,
                    author_name=change.author.name,
                )
            )

        if len(changes) < PAGE_SIZE:
            break
        after = changes[-1].commit_id

    if current is not None:
        closed.append(current.close())

    return _TraversalResult(segments=closed, already_seen_change_id=None, excluded=False)
