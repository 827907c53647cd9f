"""Type definitions for the submission pipeline."""

from dataclasses import dataclass

from stakk.core.github.comment import StackEntry
from stakk.core.github.types import PullRequest
from stakk.graph.types import BookmarkSegment


@dataclass(frozen=True)
class SubmissionAnalysis:
    """The segments to submit, trunk first, ending at the target bookmark."""

    segments: tuple[BookmarkSegment, ...]
    default_branch: str


@dataclass(frozen=True)
class BookmarkPlan:
    """What submission will do for one bookmark."""

    bookmark_name: str
    base: str
    title: str
    body: str | None
    existing_pr: PullRequest | None
    needs_push: bool
    needs_create: bool
    needs_base_update: bool


@dataclass(frozen=True)
class SubmissionPlan:
    """Ordered per-bookmark plans (trunk first) plus submission options."""

    bookmark_plans: tuple[BookmarkPlan, ...]
    remote: str
    draft: bool


@dataclass(frozen=True)
class SubmissionResult:
    """The submitted stack, trunk to leaf."""

    stack_entries: tuple[StackEntry, ...]
