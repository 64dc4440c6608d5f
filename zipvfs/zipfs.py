"""Zip archive exposed as an isolated, read-only filesystem."""

from __future__ import annotations

import logging
import os
import posixpath
import stat as stat_mod
import zipfile
from datetime import datetime
from typing import IO, BinaryIO

from .base import DIR_MODE, FILE_MODE, FileMetadata
from .errors import EmptyArchiveError, MalformedPatternError, NotFoundError, OpenError
from .match import SEP, match, validate
from .readerat import ConcurrentReaderAt, SectionFile

logger = logging.getLogger(__name__)


def open_zip(stream: BinaryIO, close_stream: bool = False) -> ZipFS:
    """Open a read-only filesystem over the zip archive in ``stream``.

    The stream must support seeking to its end and positioned reads. It
    must stay open for as long as the returned filesystem is used. Closing
    the filesystem only closes it when ``close_stream`` is true.

    Raises:
        OpenError: If the length cannot be determined or the stream is not
            a valid zip archive.
        EmptyArchiveError: If the archive has no entries.
    """
    try:
        size = stream.seek(0, os.SEEK_END)
    except (OSError, ValueError) as e:
        raise OpenError(f"cannot determine archive length: {e}") from e

    section = SectionFile(ConcurrentReaderAt(stream), size)
    try:
        archive = zipfile.ZipFile(section, mode="r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError, ValueError) as e:
        raise OpenError(f"cannot read zip archive: {e}") from e

    if not archive.infolist():
        archive.close()
        section.close()
        raise EmptyArchiveError()

    logger.debug("opened zip archive: %d entries, %d bytes", len(archive.infolist()), size)
    return ZipFS(archive, section, stream if close_stream else None)


class ZipFS:
    """Read-only filesystem over the entries of a zip archive.

    Paths are archive names matched literally: no ``.``/``..`` handling and
    no case folding. A directory may be addressed with or without its
    trailing ``/``. Entries are never synthesized, so a parent directory
    only exists if the archive stores it.

    Every method only reads the entry list, which never changes after
    construction, so a single instance can be shared between threads.
    """

    def __init__(
        self,
        archive: zipfile.ZipFile,
        section: SectionFile | None = None,
        stream: IO[bytes] | None = None,
    ):
        """Wrap an already parsed archive.

        Args:
            archive: Archive opened for reading.
            section: File object the archive reads through, closed with it.
            stream: Stream to close along with the archive, if owned.
        """
        self.archive = archive
        self._entries = archive.infolist()
        self._section = section
        self._stream = stream
        self._closed = False

    def _find(self, path: str) -> zipfile.ZipInfo | None:
        self._check_open()
        dir_path = path + SEP
        for info in self._entries:
            if info.filename == path or info.filename == dir_path:
                return info
        return None

    def stat(self, path: str) -> FileMetadata:
        """Get the metadata the archive recorded for ``path``.

        Raises:
            NotFoundError: If no entry matches.
        """
        info = self._find(path)
        if info is None:
            raise NotFoundError(path)
        return _metadata(info)

    def open(self, path: str) -> IO[bytes]:
        """Open the entry at ``path`` for reading.

        Each call returns an independent decompressing stream which may be
        read concurrently with other open streams. The caller must close it.

        Raises:
            NotFoundError: If no entry matches.
        """
        info = self._find(path)
        if info is None:
            raise NotFoundError(path)
        return self.archive.open(info, mode="r")

    def glob(self, pattern: str) -> list[str]:
        """Return the entry names matching ``pattern``, in archive order.

        Wildcards never cross a ``/``. Directory entries match on their
        stored name or on that name without the trailing ``/``, and are
        returned as stored.

        Raises:
            MalformedPatternError: If the pattern is invalid. This is a bug
                in the caller, not a runtime condition.
        """
        self._check_open()
        try:
            validate(pattern)
        except MalformedPatternError:
            logger.error("Invalid glob pattern %r", pattern)
            raise

        names = []
        for info in self._entries:
            name = info.filename
            if match(pattern, name) or (info.is_dir() and match(pattern, name.rstrip(SEP))):
                names.append(name)
        return names

    # -------------------------------------------------------------------------
    # Convenience helpers
    # -------------------------------------------------------------------------

    def names(self) -> list[str]:
        """Return every entry name in archive order."""
        self._check_open()
        return [info.filename for info in self._entries]

    def exists(self, path: str) -> bool:
        return self._find(path) is not None

    def isdir(self, path: str) -> bool:
        info = self._find(path)
        return info is not None and info.is_dir()

    def isfile(self, path: str) -> bool:
        info = self._find(path)
        return info is not None and not info.is_dir()

    def read(self, path: str) -> bytes:
        """Read the whole entry at ``path``."""
        with self.open(path) as f:
            return f.read()

    def close(self) -> None:
        """Release the archive, and the stream too if this instance owns it."""
        if self._closed:
            return
        self._closed = True
        self.archive.close()
        if self._section is not None:
            self._section.close()
        if self._stream is not None:
            self._stream.close()

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed archive")

    def __len__(self) -> int:
        return len(self._entries)

    def __enter__(self) -> ZipFS:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _metadata(info: zipfile.ZipInfo) -> FileMetadata:
    is_dir = info.is_dir()
    mode = info.external_attr >> 16
    if not mode:
        mode = DIR_MODE if is_dir else FILE_MODE
    elif not stat_mod.S_IFMT(mode):
        # Permission bits only; add the type from the entry name.
        mode |= stat_mod.S_IFDIR if is_dir else stat_mod.S_IFREG
    try:
        modified_at = datetime(*info.date_time).isoformat()
    except ValueError:
        modified_at = ""
    return FileMetadata(
        name=posixpath.basename(info.filename.rstrip(SEP)),
        size=info.file_size,
        modified_at=modified_at,
        is_dir=is_dir,
        mode=mode,
    )
