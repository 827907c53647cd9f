"""Application context with dependency injection."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from stakk.core.auth import AuthToken, TokenSource, resolve_token
from stakk.core.config import GlobalConfig, load_global_config
from stakk.core.github.abc import Forge
from stakk.core.github.real import RealGitHub
from stakk.core.jj.abc import Jj
from stakk.core.jj.real import RealJj
from stakk.core.jj.remote import GitHubRepo
from stakk.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback

TokenResolver = Callable[[], Awaitable[AuthToken]]
ForgeFactory = Callable[[GitHubRepo, AuthToken], Forge]


def _real_forge_factory(repo: GitHubRepo, token: AuthToken) -> Forge:
    return RealGitHub(repo.owner, repo.repo, token=token.token)


@dataclass(frozen=True)
class StakkContext:
    """Immutable context holding all dependencies for stakk operations.

    Created at CLI entry point and threaded through the application.
    The forge is built on demand because it needs the GitHub repository
    (resolved from the jj remotes) and an auth token.
    """

    jj: Jj
    token_resolver: TokenResolver
    forge_factory: ForgeFactory
    feedback: UserFeedback
    global_config: GlobalConfig

    def with_feedback(self, feedback: UserFeedback) -> "StakkContext":
        return StakkContext(
            jj=self.jj,
            token_resolver=self.token_resolver,
            forge_factory=self.forge_factory,
            feedback=feedback,
            global_config=self.global_config,
        )

    @staticmethod
    def for_test(
        jj: Jj | None = None,
        forge: Forge | None = None,
        token: AuthToken | None = None,
        feedback: UserFeedback | None = None,
        global_config: GlobalConfig | None = None,
    ) -> "StakkContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            jj: Optional Jj implementation. If None, creates empty FakeJj.
            forge: Optional Forge returned for every repository.
                   If None, creates empty FakeGitHub.
            token: Optional AuthToken returned by the token resolver.
                   If None, uses a fixed token from GITHUB_TOKEN.
            feedback: Optional UserFeedback implementation.
                      If None, creates FakeUserFeedback.
            global_config: Optional GlobalConfig. If None, uses defaults.

        Example:
            >>> jj = FakeJj(bookmarks=[...], commits=[...])
            >>> github = FakeGitHub(prs={"feature": PullRequest(...)})
            >>> ctx = StakkContext.for_test(jj=jj, forge=github)
        """
        from tests.fakes.user_feedback import FakeUserFeedback

        from stakk.core.github.fake import FakeGitHub
        from stakk.core.jj.fake import FakeJj

        if jj is None:
            jj = FakeJj()

        if forge is None:
            forge = FakeGitHub()

        if token is None:
            token = AuthToken(token="test-token", source=TokenSource.GITHUB_TOKEN_ENV)

        if feedback is None:
            feedback = FakeUserFeedback()

        if global_config is None:
            global_config = GlobalConfig()

        resolved_token = token
        resolved_forge = forge

        async def resolve_test_token() -> AuthToken:
            return resolved_token

        return StakkContext(
            jj=jj,
            token_resolver=resolve_test_token,
            forge_factory=lambda repo, auth: resolved_forge,
            feedback=feedback,
            global_config=global_config,
        )


def create_context(*, quiet: bool = False) -> StakkContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        quiet: If True, use SuppressedFeedback (only errors are shown)

    Raises:
        ValueError: If ~/.stakk/config.toml exists but is malformed
    """
    feedback: UserFeedback = SuppressedFeedback() if quiet else InteractiveFeedback()

    return StakkContext(
        jj=RealJj(),
        token_resolver=resolve_token,
        forge_factory=_real_forge_factory,
        feedback=feedback,
        global_config=load_global_config(),
    )
