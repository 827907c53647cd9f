"""Production implementation of forge operations using `gh api`."""

import json
import os

from stakk.core.errors import ForgeAuthError, ForgeError
from stakk.core.github.abc import Forge
from stakk.core.github.parsing import (
    parse_comment,
    parse_comment_lines,
    parse_pull_request,
    parse_pull_request_list,
)
from stakk.core.github.types import Comment, CreatePrParams, PullRequest
from stakk.core.subprocess_utils import run_subprocess_with_context

_AUTH_FAILURE_MARKERS = ("HTTP 401", "HTTP 403")


class RealGitHub(Forge):
    """Production implementation using the gh CLI's REST passthrough.

    All GitHub operations execute `gh api` via async subprocess. The resolved
    token is handed to gh through GH_TOKEN so gh's own login is not required.
    """

    def __init__(self, owner: str, repo: str, token: str | None = None) -> None:
        """Initialize RealGitHub.

        Args:
            owner: Repository owner
            repo: Repository name
            token: GitHub token passed to gh as GH_TOKEN (gh's own auth when None)
        """
        self._owner = owner
        self._repo = repo
        self._token = token

    @property
    def _repo_path(self) -> str:
        return f"repos/{self._owner}/{self._repo}"

    async def _gh_api(self, args: list[str], operation_context: str) -> str:
        env = None
        if self._token is not None:
            env = {**os.environ, "GH_TOKEN": self._token}

        try:
            return await run_subprocess_with_context(
                ["gh", "api", *args], operation_context=operation_context, env=env
            )
        except RuntimeError as e:
            message = str(e)
            if any(marker in message for marker in _AUTH_FAILURE_MARKERS):
                raise ForgeAuthError(message) from e
            raise ForgeError(message) from e

    async def _gh_api_json(self, args: list[str], operation_context: str) -> object:
        stdout = await self._gh_api(args, operation_context)
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ForgeError(f"Failed to {operation_context}: invalid JSON response") from e

    async def get_authenticated_user(self) -> str:
        stdout = await self._gh_api(
            ["user", "--jq", ".login"], operation_context="get authenticated user"
        )
        return stdout.strip()

    async def find_pr_for_branch(self, head: str) -> PullRequest | None:
        stdout = await self._gh_api(
            [
                "-X",
                "GET",
                f"{self._repo_path}/pulls",
                "-f",
                f"head={self._owner}:{head}",
                "-f",
                "state=open",
            ],
            operation_context=f"find PR for branch '{head}'",
        )
        try:
            prs = parse_pull_request_list(stdout)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ForgeError(f"Failed to parse PR list for branch '{head}'") from e
        if not prs:
            return None
        return prs[0]

    async def create_pr(self, params: CreatePrParams) -> PullRequest:
        args = [
            "-X",
            "POST",
            f"{self._repo_path}/pulls",
            "-f",
            f"title={params.title}",
            "-f",
            f"head={params.head}",
            "-f",
            f"base={params.base}",
            "-F",
            f"draft={'true' if params.draft else 'false'}",
        ]
        if params.body is not None:
            args.extend(["-f", f"body={params.body}"])

        data = await self._gh_api_json(args, operation_context=f"create PR for '{params.head}'")
        try:
            return parse_pull_request(data)  # type: ignore[arg-type]
        except (KeyError, TypeError) as e:
            raise ForgeError(f"Failed to parse created PR for '{params.head}'") from e

    async def update_pr_base(self, pr_number: int, new_base: str) -> None:
        await self._gh_api(
            ["-X", "PATCH", f"{self._repo_path}/pulls/{pr_number}", "-f", f"base={new_base}"],
            operation_context=f"update base of PR #{pr_number} to '{new_base}'",
        )

    async def list_comments(self, pr_number: int) -> list[Comment]:
        stdout = await self._gh_api(
            [
                "--paginate",
                f"{self._repo_path}/issues/{pr_number}/comments",
                "--jq",
                ".[] | {id, body} | @json",
            ],
            operation_context=f"list comments on PR #{pr_number}",
        )
        try:
            return parse_comment_lines(stdout)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ForgeError(f"Failed to parse comments on PR #{pr_number}") from e

    async def create_comment(self, pr_number: int, body: str) -> Comment:
        data = await self._gh_api_json(
            ["-X", "POST", f"{self._repo_path}/issues/{pr_number}/comments", "-f", f"body={body}"],
            operation_context=f"create comment on PR #{pr_number}",
        )
        try:
            return parse_comment(data)  # type: ignore[arg-type]
        except (KeyError, TypeError) as e:
            raise ForgeError(f"Failed to parse created comment on PR #{pr_number}") from e

    async def update_comment(self, comment_id: int, body: str) -> None:
        await self._gh_api(
            ["-X", "PATCH", f"{self._repo_path}/issues/comments/{comment_id}", "-f", f"body={body}"],
            operation_context=f"update comment {comment_id}",
        )

    async def get_repo_default_branch(self) -> str:
        stdout = await self._gh_api(
            [self._repo_path, "--jq", ".default_branch"],
            operation_context="get repository default branch",
        )
        branch = stdout.strip()
        if not branch:
            raise ForgeError("repository has no default branch")
        return branch
