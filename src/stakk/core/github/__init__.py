"""Forge (GitHub) operations subpackage.

This subpackage provides abstractions over pull-request and comment
operations with support for testing via fakes.
"""

from stakk.core.github.abc import Forge
from stakk.core.github.fake import FakeGitHub
from stakk.core.github.real import RealGitHub
from stakk.core.github.types import Comment, CreatePrParams, PRState, PullRequest

__all__ = [
    "Comment",
    "CreatePrParams",
    "FakeGitHub",
    "Forge",
    "PRState",
    "PullRequest",
    "RealGitHub",
]
