"""Positioned reads over a single seekable stream.

zipfile may read the underlying file from several open members at once.
ConcurrentReaderAt serializes every seek+read pair against the shared
stream, and SectionFile gives zipfile an ordinary file object whose
cursor is private and whose reads all go through the reader.
"""

from __future__ import annotations

import io
import os
import threading
from typing import BinaryIO


class ConcurrentReaderAt:
    """Thread-safe positioned reads on top of a seek-then-read stream."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._lock = threading.Lock()

    def readinto_at(self, buffer: bytearray | memoryview, offset: int) -> int:
        """Fill ``buffer`` from absolute ``offset``; return the bytes read.

        Exactly one seek and one read are issued per call. Errors from the
        stream propagate unchanged.
        """
        if offset < 0:
            raise ValueError(f"negative offset: {offset}")
        with self._lock:
            self._stream.seek(offset, os.SEEK_SET)
            readinto = getattr(self._stream, "readinto", None)
            if readinto is not None:
                return readinto(buffer) or 0
            data = self._stream.read(len(buffer))
            buffer[: len(data)] = data
            return len(data)

    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to ``size`` bytes starting at ``offset``."""
        buf = bytearray(size)
        n = self.readinto_at(buf, offset)
        return bytes(buf[:n])


class SectionFile(io.RawIOBase):
    """Read-only file object over a ConcurrentReaderAt.

    Attributes:
        size: Total length of the underlying stream.
    """

    def __init__(self, reader: ConcurrentReaderAt, size: int):
        super().__init__()
        self._reader = reader
        self.size = size
        self._pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        self._check_closed()
        return self._pos

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._check_closed()
        if whence == os.SEEK_SET:
            pos = offset
        elif whence == os.SEEK_CUR:
            pos = self._pos + offset
        elif whence == os.SEEK_END:
            pos = self.size + offset
        else:
            raise ValueError(f"invalid whence: {whence}")
        if pos < 0:
            raise OSError(f"negative seek position {pos}")
        self._pos = pos
        return pos

    def readinto(self, buffer) -> int:
        self._check_closed()
        remaining = self.size - self._pos
        if remaining <= 0:
            return 0
        view = memoryview(buffer).cast("B")
        if len(view) > remaining:
            view = view[:remaining]
        n = self._reader.readinto_at(view, self._pos)
        self._pos += n
        return n

    def _check_closed(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
