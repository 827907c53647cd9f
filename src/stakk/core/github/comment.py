"""Stack comment formatting and parsing.

Each PR in a submitted stack carries one stakk-managed comment. Its first line
is an HTML comment holding base64-encoded JSON metadata, so later runs can find
and update the same comment instead of posting a new one. The marker text and
its first-line placement are a persisted format: do not change them.
"""

import base64
import binascii
import logging

from pydantic import BaseModel, ConfigDict, ValidationError

from stakk.core.github.types import Comment

logger = logging.getLogger(__name__)

COMMENT_DATA_PREFIX = "<!--- STAKK_STACK: "
COMMENT_DATA_POSTFIX = " --->"
STACK_COMMENT_THIS_PR = "← this PR"
STACK_COMMENT_FOOTER = "*Created with [stakk](https://github.com/glennib/stakk)*"
STACK_COMMENT_VERSION = 0


class StackEntry(BaseModel):
    """One PR of a submitted stack."""

    model_config = ConfigDict(strict=True, frozen=True)

    bookmark_name: str
    pr_url: str
    pr_number: int


class StackCommentData(BaseModel):
    """Metadata embedded in stack comments, ordered trunk to leaf."""

    model_config = ConfigDict(strict=True, frozen=True)

    version: int
    stack: list[StackEntry]


def _first_line(body: str) -> str:
    lines = body.splitlines()
    if not lines:
        return ""
    return lines[0]


def encode_stack_data(data: StackCommentData) -> str:
    """Serialize metadata to compact JSON, then to a base64 token."""
    return base64.b64encode(data.model_dump_json().encode("utf-8")).decode("ascii")


def format_stack_comment(data: StackCommentData, current_index: int) -> str:
    """Format the stack comment body for the PR at `current_index` in `data.stack`.

    The PR the comment is posted on is rendered in bold with a "← this PR" suffix.
    """
    encoded = encode_stack_data(data)
    count = len(data.stack)
    plural = "" if count == 1 else "s"

    lines = [
        f"{COMMENT_DATA_PREFIX}{encoded}{COMMENT_DATA_POSTFIX}",
        f"This PR is part of a stack of {count} bookmark{plural}:",
        "",
        "1. `trunk()`",
    ]
    for i, entry in enumerate(data.stack):
        if i == current_index:
            lines.append(f"1. **{entry.pr_url} {STACK_COMMENT_THIS_PR}**")
        else:
            lines.append(f"1. {entry.pr_url}")

    lines.extend(["", "---", STACK_COMMENT_FOOTER])
    return "\n".join(lines)


def parse_stack_comment(body: str) -> StackCommentData | None:
    """Parse stack comment metadata from a comment body.

    Only the first line is inspected. Returns None when the marker is missing or
    the token is not valid base64, UTF-8, JSON, or StackCommentData.
    """
    first_line = _first_line(body)

    start = first_line.find(COMMENT_DATA_PREFIX)
    if start == -1:
        return None
    start += len(COMMENT_DATA_PREFIX)

    end = first_line.find(COMMENT_DATA_POSTFIX, start)
    if end == -1:
        return None

    try:
        decoded = base64.b64decode(first_line[start:end], validate=True).decode("utf-8")
        return StackCommentData.model_validate_json(decoded)
    except (binascii.Error, UnicodeDecodeError, ValidationError) as e:
        logger.debug("Ignoring malformed stack comment metadata: %s", e)
        return None


def find_stack_comment(comments: list[Comment]) -> Comment | None:
    """Find the stakk-managed comment: the first with the marker on its first line."""
    for comment in comments:
        if COMMENT_DATA_PREFIX in _first_line(comment.body):
            return comment
    return None
