"""Base reader interface and metadata dataclass.

Defines the common read-only interface shared by the filesystem
implementations (ZipFS, LocalFS, UnionFS).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import IO, Protocol, runtime_checkable

DIR_MODE = 0o040755
FILE_MODE = 0o100644


@dataclass(frozen=True)
class FileMetadata:
    """Metadata for a single file or directory.

    Attributes:
        name: Base name of the file or directory.
        size: Size in bytes (uncompressed size for archive entries).
        modified_at: ISO 8601 timestamp of the last modification.
        is_dir: True if this is a directory, False for files.
        mode: Type and permission bits; 0 means "derive from is_dir".
    """

    name: str
    size: int
    modified_at: str
    is_dir: bool = False
    mode: int = 0

    # os.stat_result-compatible properties

    @property
    def st_size(self) -> int:
        return self.size

    @property
    def st_mode(self) -> int:
        if self.mode:
            return self.mode
        return DIR_MODE if self.is_dir else FILE_MODE

    def _parse_ts(self, iso_str: str) -> float:
        try:
            return datetime.fromisoformat(iso_str).timestamp()
        except ValueError:
            return 0.0

    @property
    def st_mtime(self) -> float:
        return self._parse_ts(self.modified_at)


@runtime_checkable
class Reader(Protocol):
    """Read-only capability set every backend implements.

    Implementations typically have additional helpers like read(),
    exists(), isdir() and close(); only these three are the contract
    generic calling code may rely on.
    """

    def stat(self, path: str) -> FileMetadata:
        """Get file metadata."""
        ...

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading."""
        ...

    def glob(self, pattern: str) -> list[str]:
        """Return the paths matching a shell pattern."""
        ...
