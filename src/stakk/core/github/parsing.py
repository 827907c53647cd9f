"""Parsing utilities for GitHub REST API responses returned by `gh api`."""

import json
from typing import Any

from stakk.core.github.types import Comment, PRState, PullRequest


def _pr_state(pr: dict[str, Any]) -> PRState:
    if pr.get("merged_at"):
        return "MERGED"
    if pr.get("state") == "closed":
        return "CLOSED"
    return "OPEN"


def parse_pull_request(pr: dict[str, Any]) -> PullRequest:
    """Convert one REST pull request object into a PullRequest."""
    return PullRequest(
        number=pr["number"],
        html_url=pr.get("html_url") or "",
        title=pr.get("title") or "",
        head_ref=pr["head"]["ref"],
        base_ref=pr["base"]["ref"],
        state=_pr_state(pr),
    )


def parse_pull_request_list(json_str: str) -> list[PullRequest]:
    """Parse the JSON array returned by the pulls list endpoint."""
    return [parse_pull_request(pr) for pr in json.loads(json_str)]


def parse_comment(comment: dict[str, Any]) -> Comment:
    return Comment(id=comment["id"], body=comment.get("body") or "")


def parse_comment_lines(stdout: str) -> list[Comment]:
    """Parse one JSON comment object per line (paginated `--jq` output)."""
    return [parse_comment(json.loads(line)) for line in stdout.splitlines() if line.strip()]
