"""Fake forge operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

import asyncio
from dataclasses import replace

from stakk.core.errors import ForgeError
from stakk.core.github.abc import Forge
from stakk.core.github.types import Comment, CreatePrParams, PullRequest


class FakeGitHub(Forge):
    """In-memory fake implementation of forge operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).

    Mutations are applied to the in-memory state, so a second submission against
    the same instance sees the PRs and comments created by the first one.
    Every operation yields to the event loop once, like a real network call.
    """

    def __init__(
        self,
        *,
        prs: dict[str, PullRequest] | None = None,
        comments: dict[int, list[Comment]] | None = None,
        authenticated_user: str = "test-user",
        default_branch: str = "main",
        next_pr_number: int = 100,
        lookup_failures: set[str] | None = None,
        create_failures: set[str] | None = None,
        base_update_failures: set[int] | None = None,
        comment_failures: set[int] | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            prs: Mapping of head branch -> open PullRequest
            comments: Mapping of pr_number -> existing comments
            authenticated_user: Login returned by get_authenticated_user
            default_branch: Returned by get_repo_default_branch
            next_pr_number: Number assigned to the next created PR
            lookup_failures: Head branches whose find_pr_for_branch raises ForgeError
            create_failures: Head branches whose create_pr raises ForgeError
            base_update_failures: PR numbers whose update_pr_base raises ForgeError
            comment_failures: PR numbers whose list_comments raises ForgeError
        """
        self._prs = dict(prs or {})
        self._comments = {number: list(items) for number, items in (comments or {}).items()}
        self._authenticated_user = authenticated_user
        self._default_branch = default_branch
        self._next_pr_number = next_pr_number
        self._next_comment_id = 1000 + sum(len(items) for items in self._comments.values())
        self._lookup_failures = lookup_failures or set()
        self._create_failures = create_failures or set()
        self._base_update_failures = base_update_failures or set()
        self._comment_failures = comment_failures or set()

        self._lookup_calls: list[str] = []
        self._created_prs: list[CreatePrParams] = []
        self._updated_bases: list[tuple[int, str]] = []
        self._created_comments: list[tuple[int, str]] = []
        self._updated_comments: list[tuple[int, str]] = []

    @property
    def lookup_calls(self) -> list[str]:
        """Head branches passed to find_pr_for_branch, in call order."""
        return list(self._lookup_calls)

    @property
    def created_prs(self) -> list[CreatePrParams]:
        """Parameters of every successful create_pr call."""
        return list(self._created_prs)

    @property
    def updated_bases(self) -> list[tuple[int, str]]:
        """(pr_number, new_base) of every successful update_pr_base call."""
        return list(self._updated_bases)

    @property
    def created_comments(self) -> list[tuple[int, str]]:
        """(pr_number, body) of every created comment."""
        return list(self._created_comments)

    @property
    def updated_comments(self) -> list[tuple[int, str]]:
        """(comment_id, body) of every updated comment."""
        return list(self._updated_comments)

    def comments_for(self, pr_number: int) -> list[Comment]:
        """Current comments on a PR (for test assertions)."""
        return list(self._comments.get(pr_number, []))

    async def get_authenticated_user(self) -> str:
        await asyncio.sleep(0)
        return self._authenticated_user

    async def find_pr_for_branch(self, head: str) -> PullRequest | None:
        self._lookup_calls.append(head)
        await asyncio.sleep(0)
        if head in self._lookup_failures:
            raise ForgeError(f"API error: lookup of '{head}' failed")
        return self._prs.get(head)

    async def create_pr(self, params: CreatePrParams) -> PullRequest:
        await asyncio.sleep(0)
        if params.head in self._create_failures:
            raise ForgeError(f"API error: create PR for '{params.head}' failed")

        number = self._next_pr_number
        self._next_pr_number += 1
        pr = PullRequest(
            number=number,
            html_url=f"https://github.com/owner/repo/pull/{number}",
            title=params.title,
            head_ref=params.head,
            base_ref=params.base,
            state="OPEN",
        )
        self._prs[params.head] = pr
        self._created_prs.append(params)
        return pr

    async def update_pr_base(self, pr_number: int, new_base: str) -> None:
        await asyncio.sleep(0)
        if pr_number in self._base_update_failures:
            raise ForgeError(f"API error: update base of PR #{pr_number} failed")

        for head, pr in self._prs.items():
            if pr.number == pr_number:
                self._prs[head] = replace(pr, base_ref=new_base)
        self._updated_bases.append((pr_number, new_base))

    async def list_comments(self, pr_number: int) -> list[Comment]:
        await asyncio.sleep(0)
        if pr_number in self._comment_failures:
            raise ForgeError(f"API error: list comments on PR #{pr_number} failed")
        return list(self._comments.get(pr_number, []))

    async def create_comment(self, pr_number: int, body: str) -> Comment:
        await asyncio.sleep(0)
        comment = Comment(id=self._next_comment_id, body=body)
        self._next_comment_id += 1
        self._comments.setdefault(pr_number, []).append(comment)
        self._created_comments.append((pr_number, body))
        return comment

    async def update_comment(self, comment_id: int, body: str) -> None:
        await asyncio.sleep(0)
        for pr_number, items in self._comments.items():
            self._comments[pr_number] = [
                Comment(id=c.id, body=body) if c.id == comment_id else c for c in items
            ]
        self._updated_comments.append((comment_id, body))

    async def get_repo_default_branch(self) -> str:
        await asyncio.sleep(0)
        return self._default_branch
