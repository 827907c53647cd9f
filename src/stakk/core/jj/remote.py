"""GitHub remote URL parsing and push-remote resolution."""

from dataclasses import dataclass

from stakk.core.errors import NoGitHubRemoteError, RemoteNotFoundError, RemoteNotGitHubError
from stakk.core.jj.types import GitRemote

_SSH_PREFIX = "git@github.com:"
_HTTPS_PREFIXES = ("https://github.com/", "http://github.com/")


@dataclass(frozen=True)
class GitHubRepo:
    """A GitHub repository reference parsed from a remote URL."""

    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_github_url(url: str) -> GitHubRepo | None:
    """Parse a GitHub owner/repo from a remote URL.

    Supports:
    - HTTPS: https://github.com/owner/repo.git
    - SSH: git@github.com:owner/repo.git
    - With or without .git suffix and trailing slash

    Returns:
        GitHubRepo, or None for non-GitHub or malformed URLs
    """
    if url.startswith(_SSH_PREFIX):
        return _parse_owner_repo(url.removeprefix(_SSH_PREFIX))

    for prefix in _HTTPS_PREFIXES:
        if url.startswith(prefix):
            return _parse_owner_repo(url.removeprefix(prefix))

    return None


def _parse_owner_repo(path: str) -> GitHubRepo | None:
    path = path.removesuffix(".git").removesuffix("/")

    parts = path.split("/")
    if len(parts) != 2:
        return None

    owner, repo = parts
    if not owner or not repo:
        return None
    return GitHubRepo(owner=owner, repo=repo)


def resolve_github_remote(
    remotes: list[GitRemote], preferred: str | None
) -> tuple[str, GitHubRepo]:
    """Pick the remote to push to and the GitHub repository it points at.

    Args:
        remotes: Configured git remotes
        preferred: Remote name to use. When None, the first GitHub remote wins.

    Returns:
        Tuple of (remote name, GitHubRepo)

    Raises:
        RemoteNotFoundError: preferred remote does not exist
        RemoteNotGitHubError: preferred remote is not hosted on GitHub
        NoGitHubRemoteError: no remote is hosted on GitHub
    """
    if preferred is not None:
        for remote in remotes:
            if remote.name != preferred:
                continue
            repo = parse_github_url(remote.url)
            if repo is None:
                raise RemoteNotGitHubError(remote.name, remote.url)
            return remote.name, repo
        raise RemoteNotFoundError(preferred)

    for remote in remotes:
        repo = parse_github_url(remote.url)
        if repo is not None:
            return remote.name, repo

    raise NoGitHubRemoteError()
