"""Pydantic models for JSON output schemas.

These models define the validated JSON document printed by `stakk show --json`.
"""

from pydantic import BaseModel, ConfigDict


class RemoteInfo(BaseModel):
    """A git remote and the GitHub repository it points at (if any)."""

    model_config = ConfigDict(strict=True)

    name: str
    url: str
    github_repo: str | None


class SegmentInfo(BaseModel):
    """One bookmark segment of a stack.

    Attributes:
        bookmark_names: All bookmarks on the segment's change, primary first
        change_id: jj change id of the segment's newest commit
        commit_count: Number of commits in the segment
    """

    model_config = ConfigDict(strict=True)

    bookmark_names: list[str]
    change_id: str
    commit_count: int


class StackInfo(BaseModel):
    model_config = ConfigDict(strict=True)

    label: str
    segments: list[SegmentInfo]


class ShowCommandResponse(BaseModel):
    """JSON response schema for the `stakk show` command."""

    model_config = ConfigDict(strict=True)

    default_branch: str
    remotes: list[RemoteInfo]
    stacks: list[StackInfo]
    excluded_bookmark_count: int
