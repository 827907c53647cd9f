"""Error taxonomy for stakk.

Every failure surfaced to the CLI derives from StakkError. Merge-taint
exclusion during graph construction is not an error and never appears here.
"""


class StakkError(Exception):
    """Base class for all stakk errors."""


class JjError(StakkError):
    """A jj command failed, was not found, or produced unparseable output."""


class ForgeError(StakkError):
    """A forge (GitHub) API operation failed."""


class ForgeAuthError(ForgeError):
    """The forge rejected the request as unauthenticated or forbidden."""


class AuthError(StakkError):
    """Authentication token resolution failed."""


class NoAuthFoundError(AuthError):
    """No GitHub token could be found from any supported source."""

    def __init__(self) -> None:
        super().__init__(
            "no GitHub authentication found\n"
            "Run `gh auth login` or set GITHUB_TOKEN/GH_TOKEN"
        )


class RemoteError(StakkError):
    """The git remote used for pushing could not be resolved."""


class RemoteNotFoundError(RemoteError):
    def __init__(self, name: str) -> None:
        super().__init__(f"remote '{name}' not found")
        self.name = name


class RemoteNotGitHubError(RemoteError):
    def __init__(self, name: str, url: str) -> None:
        super().__init__(f"remote '{name}' is not a GitHub remote: {url}")
        self.name = name
        self.url = url


class NoGitHubRemoteError(RemoteError):
    def __init__(self) -> None:
        super().__init__("no GitHub remote found")


class BookmarkNotFoundError(StakkError):
    """The requested bookmark is not part of any stack."""

    def __init__(self, bookmark: str) -> None:
        super().__init__(f"bookmark '{bookmark}' not found in any stack")
        self.bookmark = bookmark


class SegmentMissingBookmarkError(StakkError):
    """A segment has no bookmark name (data-integrity violation)."""

    def __init__(self, change_id: str) -> None:
        super().__init__(f"segment for change {change_id} has no bookmark name")
        self.change_id = change_id


class GraphIntegrityError(StakkError):
    """The jj log output had a shape the graph builder cannot interpret."""


class SubmissionError(StakkError):
    """Base class for failures during planning or executing a submission.

    The underlying error is kept as ``source`` and chained as ``__cause__``
    by the raising site.
    """

    def __init__(self, message: str, source: BaseException) -> None:
        super().__init__(f"{message}: {source}")
        self.source = source


class PrLookupFailedError(SubmissionError):
    def __init__(self, bookmark: str, source: BaseException) -> None:
        super().__init__(f"failed to check for existing PR for '{bookmark}'", source)
        self.bookmark = bookmark


class PushFailedError(SubmissionError):
    def __init__(self, bookmark: str, source: BaseException) -> None:
        super().__init__(f"failed to push bookmark '{bookmark}'", source)
        self.bookmark = bookmark


class BaseUpdateFailedError(SubmissionError):
    def __init__(self, bookmark: str, source: BaseException) -> None:
        super().__init__(f"failed to update PR base for '{bookmark}'", source)
        self.bookmark = bookmark


class PrCreateFailedError(SubmissionError):
    def __init__(self, bookmark: str, source: BaseException) -> None:
        super().__init__(f"failed to create PR for '{bookmark}'", source)
        self.bookmark = bookmark


class CommentFailedError(SubmissionError):
    def __init__(self, pr_number: int, source: BaseException) -> None:
        super().__init__(f"failed to reconcile stack comment on PR #{pr_number}", source)
        self.pr_number = pr_number
