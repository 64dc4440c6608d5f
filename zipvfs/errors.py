"""Exceptions raised by zipvfs.

All exceptions derive from VFSError so callers can catch them as a group.
NotFoundError and MalformedPatternError also derive from the builtin
exception a plain Python caller would expect.
"""

from __future__ import annotations

import errno


class VFSError(Exception):
    """Base class for zipvfs errors."""


class OpenError(VFSError):
    """The stream could not be opened as an archive."""


class EmptyArchiveError(OpenError):
    """The archive parsed but holds no entries."""

    def __init__(self) -> None:
        super().__init__("archive has no root directory")


class NotFoundError(VFSError, FileNotFoundError):
    """No entry matches the requested path."""

    def __init__(self, path: str):
        super().__init__(errno.ENOENT, "path does not exist", path)
        self.path = path

    def __str__(self) -> str:
        return f"path {self.path!r} does not exist"


class MalformedPatternError(VFSError, ValueError):
    """A glob pattern is syntactically invalid."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid glob pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason
