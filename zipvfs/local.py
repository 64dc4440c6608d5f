"""Read-only access to a real directory tree.

Provides the same capability set as ZipFS over the host filesystem,
restricted to a root directory.
"""

from __future__ import annotations

import io
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import IO

from .base import FileMetadata
from .errors import MalformedPatternError, NotFoundError
from .match import SEP, match, validate

logger = logging.getLogger(__name__)


class LocalFS:
    """Reader over a real directory, confined to a root.

    Security features:
    - Rejects paths outside the root directory
    - Validates resolved paths, so symlinks cannot escape the root
    - Normalizes all path variations (../, ./, etc.)
    """

    def __init__(self, root: str):
        """Initialize the local filesystem.

        Args:
            root: Path to an existing directory.

        Raises:
            ValueError: If root does not exist or is not a directory.
        """
        root_path = Path(root).resolve()
        if not root_path.is_dir():
            raise ValueError(f"Root must be an existing directory: {root}")
        self.root = root_path

    def _validate_path(self, path: str) -> Path:
        """Resolve ``path`` under the root.

        Absolute paths are treated as relative to the root (chroot-like).

        Raises:
            PermissionError: If the path escapes the root directory.
        """
        p = Path(path)
        if p.is_absolute():
            p = p.relative_to(p.anchor)
        resolved = (self.root / p).resolve()

        try:
            resolved.relative_to(self.root)
        except ValueError:
            raise PermissionError(f"Path outside root: {path} (root: {self.root})")

        return resolved

    def stat(self, path: str) -> FileMetadata:
        """Get file metadata.

        Raises:
            NotFoundError: If the path doesn't exist.
        """
        resolved = self._validate_path(path)
        try:
            st = resolved.stat()
        except (FileNotFoundError, NotADirectoryError):
            raise NotFoundError(path) from None

        is_dir = resolved.is_dir()
        return FileMetadata(
            name=resolved.name,
            size=0 if is_dir else st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc).isoformat(),
            is_dir=is_dir,
            mode=st.st_mode,
        )

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading.

        Raises:
            NotFoundError: If the file doesn't exist.
            IsADirectoryError: If the path is a directory.
        """
        resolved = self._validate_path(path)
        try:
            return io.open(resolved, "rb")
        except (FileNotFoundError, NotADirectoryError):
            raise NotFoundError(path) from None

    def glob(self, pattern: str) -> list[str]:
        """Return root-relative paths matching ``pattern``, sorted.

        The pattern is expanded one segment at a time, so wildcards never
        cross a ``/``. Directories are returned without a trailing
        separator. Unreadable directories are skipped.

        Raises:
            MalformedPatternError: If the pattern is invalid.
        """
        try:
            validate(pattern)
        except MalformedPatternError:
            logger.error("Invalid glob pattern %r", pattern)
            raise

        # Expanded with match rather than Path.glob so separators and malformed
        # patterns behave exactly as in ZipFS.glob.
        parts = [part for part in pattern.split(SEP) if part]
        if not parts:
            return []

        candidates = [self.root]
        for part in parts:
            expanded = []
            for base in candidates:
                if not _has_magic(part):
                    p = base / part
                    if p.exists():
                        expanded.append(p)
                    continue
                try:
                    children = os.listdir(base)
                except OSError:
                    continue
                expanded.extend(base / child for child in children if match(part, child))
            candidates = expanded

        results = []
        for p in candidates:
            try:
                p.resolve().relative_to(self.root)
            except ValueError:
                continue
            results.append(p.relative_to(self.root).as_posix())
        return sorted(results)

    def exists(self, path: str) -> bool:
        return self._validate_path(path).exists()

    def isdir(self, path: str) -> bool:
        return self._validate_path(path).is_dir()

    def isfile(self, path: str) -> bool:
        return self._validate_path(path).is_file()

    def read(self, path: str) -> bytes:
        """Read entire file as bytes."""
        with self.open(path) as f:
            return f.read()

    def close(self) -> None:
        pass

    def __enter__(self) -> LocalFS:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LocalFS({os.fspath(self.root)!r})"


def _has_magic(part: str) -> bool:
    return any(c in part for c in "*?[\\")
