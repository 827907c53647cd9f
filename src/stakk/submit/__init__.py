"""Submission pipeline: analyze, plan, execute."""

from stakk.submit.analyze import analyze_submission
from stakk.submit.execute import execute_submission_plan
from stakk.submit.plan import create_submission_plan, format_submission_plan
from stakk.submit.types import BookmarkPlan, SubmissionAnalysis, SubmissionPlan, SubmissionResult

__all__ = [
    "BookmarkPlan",
    "SubmissionAnalysis",
    "SubmissionPlan",
    "SubmissionResult",
    "analyze_submission",
    "create_submission_plan",
    "execute_submission_plan",
    "format_submission_plan",
]
