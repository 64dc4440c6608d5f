"""Shared fixtures: small zip archives built in memory."""

import io
import zipfile

import pytest

from zipvfs import open_zip

ENTRIES = {
    "a.txt": b"alpha\n",
    "dir/": b"",
    "dir/b.txt": b"bravo " * 1000,
}


def build_zip(entries: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> io.BytesIO:
    """Build a zip archive holding ``entries`` in insertion order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=compression) as zf:
        for name, data in entries.items():
            info = zipfile.ZipInfo(name, date_time=(2024, 5, 17, 12, 30, 0))
            if name.endswith("/"):
                info.external_attr = (0o40755 << 16) | 0x10
            else:
                info.external_attr = 0o100644 << 16
                info.compress_type = compression
            zf.writestr(info, data)
    buf.seek(0)
    return buf


@pytest.fixture
def archive_bytes():
    return build_zip(ENTRIES)


@pytest.fixture
def zfs(archive_bytes):
    fs = open_zip(archive_bytes)
    yield fs
    fs.close()


@pytest.fixture
def make_zip():
    """Factory fixture for archives with custom entries."""
    return build_zip
