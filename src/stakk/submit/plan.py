"""Plan a submission by diffing the desired stack against live forge state."""

import asyncio
import logging

from stakk.core.errors import PrLookupFailedError, SegmentMissingBookmarkError
from stakk.core.github.abc import Forge
from stakk.core.github.types import PullRequest
from stakk.graph.types import BookmarkSegment
from stakk.submit.types import BookmarkPlan, SubmissionAnalysis, SubmissionPlan

logger = logging.getLogger(__name__)

BODY_SEPARATOR = "\n\n---\n\n"


def _primary_name(segment: BookmarkSegment) -> str:
    name = segment.primary_name
    if name is None:
        raise SegmentMissingBookmarkError(segment.change_id)
    return name


def pr_title(segment: BookmarkSegment, bookmark_name: str) -> str:
    """First line of the newest commit's description, or the bookmark name."""
    if not segment.commits:
        return bookmark_name
    lines = segment.commits[0].description.splitlines()
    title = lines[0].strip() if lines else ""
    return title or bookmark_name


def pr_body(segment: BookmarkSegment) -> str | None:
    """PR description built from the segment's commit messages.

    A single commit contributes everything after its title line. Several
    commits contribute their full descriptions, newest first, separated by a
    horizontal rule.
    """
    if not segment.commits:
        return None

    if len(segment.commits) == 1:
        parts = segment.commits[0].description.split("\n", 1)
        if len(parts) < 2:
            return None
        return parts[1].strip() or None

    descriptions = [c.description.strip() for c in segment.commits]
    body = BODY_SEPARATOR.join(d for d in descriptions if d)
    return body or None


async def create_submission_plan(
    analysis: SubmissionAnalysis, forge: Forge, remote: str, *, draft: bool = False
) -> SubmissionPlan:
    """Compute what must be pushed, created and re-based for each bookmark.

    PR lookups for all bookmarks run concurrently. Every lookup runs to
    completion; the first failure in stack order is then raised.

    Raises:
        SegmentMissingBookmarkError: If a segment has no bookmark name
        PrLookupFailedError: If any PR lookup fails
    """
    names = [_primary_name(segment) for segment in analysis.segments]

    lookups = await asyncio.gather(
        *(forge.find_pr_for_branch(name) for name in names), return_exceptions=True
    )

    existing_prs: list[PullRequest | None] = []
    for name, outcome in zip(names, lookups):
        if isinstance(outcome, BaseException):
            raise PrLookupFailedError(name, outcome) from outcome
        existing_prs.append(outcome)

    bookmark_plans: list[BookmarkPlan] = []
    for index, (segment, name, existing_pr) in enumerate(
        zip(analysis.segments, names, existing_prs)
    ):
        base = analysis.default_branch if index == 0 else names[index - 1]
        bookmark_plans.append(
            BookmarkPlan(
                bookmark_name=name,
                base=base,
                title=pr_title(segment, name),
                body=pr_body(segment),
                existing_pr=existing_pr,
                # Pushing an up-to-date bookmark is a no-op.
                needs_push=True,
                needs_create=existing_pr is None,
                needs_base_update=existing_pr is not None and existing_pr.base_ref != base,
            )
        )

    logger.debug("Planned submission of %d bookmark(s) to %s", len(bookmark_plans), remote)
    return SubmissionPlan(bookmark_plans=tuple(bookmark_plans), remote=remote, draft=draft)


def format_submission_plan(plan: SubmissionPlan) -> str:
    """Render the plan as the human-readable dry-run summary."""
    count = len(plan.bookmark_plans)
    draft = ", draft" if plan.draft else ""
    lines = [f"Submission plan ({count} bookmark(s), remote: {plan.remote}{draft}):"]

    for bp in plan.bookmark_plans:
        lines.append(f"  {bp.bookmark_name} (base: {bp.base})")
        if bp.needs_push:
            lines.append(f"    - push bookmark to {plan.remote}")
        if bp.needs_create:
            lines.append(f'    - create PR: "{bp.title}"')
        pr = bp.existing_pr
        if pr is not None:
            if bp.needs_base_update:
                lines.append(f"    - update PR #{pr.number} base: {pr.base_ref} -> {bp.base}")
            elif not bp.needs_create:
                lines.append(f"    - PR #{pr.number} up to date")

    return "\n".join(lines)
