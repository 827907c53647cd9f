"""GitHub authentication token resolution.

Resolves a token in priority order:
1. `gh auth token` (GitHub CLI)
2. GITHUB_TOKEN environment variable
3. GH_TOKEN environment variable

The token is not validated here; use Forge.get_authenticated_user() for that.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from stakk.core.errors import NoAuthFoundError
from stakk.core.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)


class TokenSource(Enum):
    GITHUB_CLI = "GitHub CLI (gh auth token)"
    GITHUB_TOKEN_ENV = "GITHUB_TOKEN environment variable"
    GH_TOKEN_ENV = "GH_TOKEN environment variable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AuthToken:
    """A resolved authentication token with its source."""

    token: str
    source: TokenSource


async def _try_gh_cli() -> str | None:
    try:
        stdout = await run_subprocess_with_context(
            ["gh", "auth", "token"], operation_context="read token from gh"
        )
    except RuntimeError as e:
        # gh not installed or not logged in: fall through to env vars
        logger.debug("gh auth token unavailable: %s", e)
        return None

    token = stdout.strip()
    return token or None


async def resolve_token(environ: Mapping[str, str] | None = None) -> AuthToken:
    """Resolve a GitHub token from the first source that provides one.

    Args:
        environ: Environment to read token variables from (os.environ when None)

    Raises:
        NoAuthFoundError: If no source yields a non-empty token
    """
    env = os.environ if environ is None else environ

    token = await _try_gh_cli()
    if token is not None:
        return AuthToken(token=token, source=TokenSource.GITHUB_CLI)

    for name, source in (
        ("GITHUB_TOKEN", TokenSource.GITHUB_TOKEN_ENV),
        ("GH_TOKEN", TokenSource.GH_TOKEN_ENV),
    ):
        value = env.get(name, "")
        if value:
            return AuthToken(token=value, source=source)

    raise NoAuthFoundError()
