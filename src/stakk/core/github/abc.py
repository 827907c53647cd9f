"""Abstract base class for forge operations."""

from abc import ABC, abstractmethod

from stakk.core.github.types import Comment, CreatePrParams, PullRequest


class Forge(ABC):
    """Abstract interface for pull-request and comment operations on a forge.

    All implementations (real and fake) must implement this interface.
    Implementations must tolerate concurrent overlapping calls. Every failure
    is raised as ForgeError (ForgeAuthError for rejected credentials).
    """

    @abstractmethod
    async def get_authenticated_user(self) -> str:
        """Login of the user the credentials belong to."""
        ...

    @abstractmethod
    async def find_pr_for_branch(self, head: str) -> PullRequest | None:
        """Find the open PR whose head branch is `head`.

        Returns:
            The PR, or None if no open PR exists for the branch
        """
        ...

    @abstractmethod
    async def create_pr(self, params: CreatePrParams) -> PullRequest:
        """Create a pull request."""
        ...

    @abstractmethod
    async def update_pr_base(self, pr_number: int, new_base: str) -> None:
        """Change the base branch of an existing PR."""
        ...

    @abstractmethod
    async def list_comments(self, pr_number: int) -> list[Comment]:
        """List all comments on a PR, oldest first."""
        ...

    @abstractmethod
    async def create_comment(self, pr_number: int, body: str) -> Comment:
        """Add a comment to a PR."""
        ...

    @abstractmethod
    async def update_comment(self, comment_id: int, body: str) -> None:
        """Replace the body of an existing comment."""
        ...

    @abstractmethod
    async def get_repo_default_branch(self) -> str:
        """Default branch of the repository as configured on the forge."""
        ...
