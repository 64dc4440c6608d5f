"""zipvfs: Zip archives as read-only virtual filesystems."""

from .base import FileMetadata, Reader
from .config import FSConfig, LocalFSConfig, UnionFSConfig, ZipFSConfig, connect_fs, open_fs
from .context import current_fs, get_current_fs, read_file, use_fs
from .errors import (
    EmptyArchiveError,
    MalformedPatternError,
    NotFoundError,
    OpenError,
    VFSError,
)
from .local import LocalFS
from .match import match
from .readerat import ConcurrentReaderAt
from .union import UnionFS
from .zipfs import ZipFS, open_zip

__all__ = [
    "ConcurrentReaderAt",
    "connect_fs",
    "current_fs",
    "EmptyArchiveError",
    "FileMetadata",
    "FSConfig",
    "get_current_fs",
    "LocalFS",
    "LocalFSConfig",
    "MalformedPatternError",
    "match",
    "NotFoundError",
    "open_fs",
    "open_zip",
    "OpenError",
    "read_file",
    "Reader",
    "UnionFS",
    "UnionFSConfig",
    "use_fs",
    "VFSError",
    "ZipFS",
    "ZipFSConfig",
]
