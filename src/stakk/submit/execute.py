"""Apply a submission plan: push, re-base, create PRs, reconcile stack comments."""

import asyncio
import logging

from stakk.core.errors import (
    BaseUpdateFailedError,
    CommentFailedError,
    ForgeError,
    JjError,
    PrCreateFailedError,
    PushFailedError,
)
from stakk.core.github.abc import Forge
from stakk.core.github.comment import (
    STACK_COMMENT_VERSION,
    StackCommentData,
    StackEntry,
    find_stack_comment,
    format_stack_comment,
)
from stakk.core.github.types import CreatePrParams, PullRequest
from stakk.core.jj.abc import Jj
from stakk.core.user_feedback import UserFeedback
from stakk.submit.types import BookmarkPlan, SubmissionPlan, SubmissionResult

logger = logging.getLogger(__name__)


async def execute_submission_plan(
    plan: SubmissionPlan, jj: Jj, forge: Forge, feedback: UserFeedback
) -> SubmissionResult:
    """Execute a submission plan in four phases.

    1. Push every bookmark, trunk first, one at a time.
    2. Update the base of existing PRs concurrently.
    3. Create missing PRs, trunk first, one at a time (a PR's base branch
       must exist before a PR targeting it can be opened).
    4. Create or update the stack comment on every PR concurrently.

    Concurrent phases always finish the whole batch before the first failure
    (in stack order) is raised. Nothing is rolled back; running the submission
    again converges.

    Raises:
        PushFailedError, BaseUpdateFailedError, PrCreateFailedError,
        CommentFailedError: On the first failure of the matching phase
    """
    await _push_bookmarks(plan, jj, feedback)
    await _update_bases(plan, forge, feedback)
    prs = await _create_prs(plan, forge, feedback)

    stack_entries = tuple(
        StackEntry(bookmark_name=bp.bookmark_name, pr_url=pr.html_url, pr_number=pr.number)
        for bp, pr in zip(plan.bookmark_plans, prs)
    )
    await _reconcile_comments(stack_entries, forge, feedback)

    return SubmissionResult(stack_entries=stack_entries)


async def _push_bookmarks(plan: SubmissionPlan, jj: Jj, feedback: UserFeedback) -> None:
    for bp in plan.bookmark_plans:
        if not bp.needs_push:
            continue
        feedback.info(f"Pushing bookmark: {bp.bookmark_name}")
        try:
            await jj.push_bookmark(bp.bookmark_name, plan.remote)
        except JjError as e:
            raise PushFailedError(bp.bookmark_name, e) from e


async def _update_bases(plan: SubmissionPlan, forge: Forge, feedback: UserFeedback) -> None:
    updates: list[tuple[BookmarkPlan, PullRequest]] = [
        (bp, bp.existing_pr)
        for bp in plan.bookmark_plans
        if bp.needs_base_update and bp.existing_pr is not None
    ]
    if not updates:
        return

    for bp, pr in updates:
        feedback.info(f"Updating base of PR #{pr.number}: {pr.base_ref} -> {bp.base}")

    outcomes = await asyncio.gather(
        *(forge.update_pr_base(pr.number, bp.base) for bp, pr in updates),
        return_exceptions=True,
    )
    for (bp, _), outcome in zip(updates, outcomes):
        if isinstance(outcome, BaseException):
            raise BaseUpdateFailedError(bp.bookmark_name, outcome) from outcome


async def _create_prs(
    plan: SubmissionPlan, forge: Forge, feedback: UserFeedback
) -> list[PullRequest]:
    prs: list[PullRequest] = []
    for bp in plan.bookmark_plans:
        if bp.existing_pr is not None:
            feedback.info(f"  Existing PR #{bp.existing_pr.number}: {bp.existing_pr.html_url}")
            prs.append(bp.existing_pr)
            continue

        params = CreatePrParams(
            title=bp.title,
            head=bp.bookmark_name,
            base=bp.base,
            body=bp.body,
            draft=plan.draft,
        )
        try:
            pr = await forge.create_pr(params)
        except ForgeError as e:
            raise PrCreateFailedError(bp.bookmark_name, e) from e
        feedback.success(f"  Created PR #{pr.number}: {pr.html_url}")
        prs.append(pr)
    return prs


async def _reconcile_comment(data: StackCommentData, index: int, forge: Forge) -> None:
    entry = data.stack[index]
    body = format_stack_comment(data, index)
    existing = find_stack_comment(await forge.list_comments(entry.pr_number))
    if existing is None:
        logger.debug("Creating stack comment on PR #%d", entry.pr_number)
        await forge.create_comment(entry.pr_number, body)
    else:
        logger.debug("Updating stack comment %d on PR #%d", existing.id, entry.pr_number)
        await forge.update_comment(existing.id, body)


async def _reconcile_comments(
    stack_entries: tuple[StackEntry, ...], forge: Forge, feedback: UserFeedback
) -> None:
    data = StackCommentData(version=STACK_COMMENT_VERSION, stack=list(stack_entries))
    feedback.info(f"Updating stack comments on {len(stack_entries)} PR(s)")

    outcomes = await asyncio.gather(
        *(_reconcile_comment(data, i, forge) for i in range(len(stack_entries))),
        return_exceptions=True,
    )
    for entry, outcome in zip(stack_entries, outcomes):
        if isinstance(outcome, BaseException):
            raise CommentFailedError(entry.pr_number, outcome) from outcome
