"""Context-local default reader.

Code that does not want to thread a reader through every call can use
the current one: set it for a block with use_fs(), and read files with
read_file(). Outside any use_fs() block the host filesystem is used,
read only.
"""

import contextvars
from contextlib import contextmanager
from typing import Iterator

from .base import Reader
from .local import LocalFS

# Context variable holding the current reader
current_fs: contextvars.ContextVar[Reader | None] = contextvars.ContextVar(
    "zipvfs_current_fs", default=None
)


def get_current_fs() -> Reader:
    """Return the reader set by use_fs(), or the host filesystem."""
    fs = current_fs.get()
    if fs is None:
        return LocalFS("/")
    return fs


@contextmanager
def use_fs(fs: Reader) -> Iterator[Reader]:
    """Make ``fs`` the current reader for the duration of the block.

    Example::

        with open_zip(stream) as archive, use_fs(archive):
            data = read_file("docs/readme.txt")
    """
    token = current_fs.set(fs)
    try:
        yield fs
    finally:
        current_fs.reset(token)


def read_file(path: str, fs: Reader | None = None) -> bytes:
    """Read the whole file at ``path`` from ``fs`` or the current reader."""
    if fs is None:
        fs = get_current_fs()
    with fs.open(path) as f:
        return f.read()
