"""Type definitions for the bookmark change graph."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SegmentCommit:
    """A commit inside a bookmark segment, reduced to what submission needs."""

    commit_id: str
    change_id: str
    description: str
    author_name: str


@dataclass(frozen=True)
class BookmarkSegment:
    """The commits belonging to one bookmark (or several on the same change).

    Commits are ordered newest first. `bookmark_names` is never empty for
    segments produced by the graph builder; the first name is the primary one.
    """

    bookmark_names: tuple[str, ...]
    change_id: str
    commits: tuple[SegmentCommit, ...]

    @property
    def primary_name(self) -> str | None:
        if not self.bookmark_names:
            return None
        return self.bookmark_names[0]


@dataclass(frozen=True)
class BranchStack:
    """A linear chain of segments ordered trunk first."""

    segments: tuple[BookmarkSegment, ...]

    @property
    def leaf(self) -> BookmarkSegment | None:
        if not self.segments:
            return None
        return self.segments[-1]


@dataclass(frozen=True)
class ChangeGraph:
    """Bookmark stacking topology discovered from the repository.

    Attributes:
        adjacency: child change_id -> parent change_id (edges point toward trunk)
        leaves: change_ids no other segment names as its parent
        roots: change_ids whose segment sits directly on trunk
        segments: change_id -> segment
        tainted_change_ids: change_ids reachable from a merge commit
        excluded_bookmark_count: bookmarks dropped because of merge commits
        stacks: one stack per leaf, sorted by leaf change_id
    """

    adjacency: dict[str, str] = field(default_factory=dict)
    leaves: frozenset[str] = frozenset()
    roots: frozenset[str] = frozenset()
    segments: dict[str, BookmarkSegment] = field(default_factory=dict)
    tainted_change_ids: frozenset[str] = frozenset()
    excluded_bookmark_count: int = 0
    stacks: tuple[BranchStack, ...] = ()
