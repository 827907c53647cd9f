"""jj operations subpackage.

This subpackage provides abstractions over jj operations with support for
testing via fakes.
"""

from stakk.core.jj.abc import PAGE_SIZE, Jj
from stakk.core.jj.fake import FakeJj
from stakk.core.jj.real import RealJj
from stakk.core.jj.types import Bookmark, GitRemote, LogEntry, Signature

__all__ = [
    "PAGE_SIZE",
    "Bookmark",
    "FakeJj",
    "GitRemote",
    "Jj",
    "LogEntry",
    "RealJj",
    "Signature",
]
