"""Configuration for filesystem readers.

Provides configuration dataclasses, the connect_fs factory function and
open_fs, which builds a reader from a configuration.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Literal

from .base import Reader
from .errors import OpenError
from .local import LocalFS
from .union import UnionFS
from .zipfs import open_zip


@dataclass
class ZipFSConfig:
    """Configuration for a zip archive on disk.

    Attributes:
        type: Always "zip".
        path: Path to the archive file.
    """

    type: Literal["zip"] = "zip"
    path: str = ""


@dataclass
class LocalFSConfig:
    """Configuration for a real directory tree.

    Attributes:
        type: Always "local".
        root: Directory all paths are resolved against.
    """

    type: Literal["local"] = "local"
    root: str = ""


@dataclass
class UnionFSConfig:
    """Configuration for layered readers.

    Attributes:
        type: Always "union".
        layers: Layer configurations, highest precedence first.
    """

    type: Literal["union"] = "union"
    layers: list[FSConfig] = field(default_factory=list)


# Type alias for all filesystem configs
FSConfig = ZipFSConfig | LocalFSConfig | UnionFSConfig


def connect_fs(
    type: Literal["zip", "local", "union"] = "zip",
    **kwargs,
) -> FSConfig:
    """Configure filesystem access.

    Args:
        type: FileSystem type.
            - "zip": A zip archive read as an immutable tree.
                     Requires 'path' argument.
            - "local": A real directory, read only.
                       Requires 'root' argument.
            - "union": Several configurations layered in order.
                       Requires a non-empty 'layers' list.
        **kwargs: Additional configuration for the filesystem type.

    Returns:
        FSConfig for open_fs().

    Examples:
        >>> connect_fs(type="zip", path="/data/bundle.zip")
        ZipFSConfig(type='zip', path='/data/bundle.zip')

        >>> connect_fs(type="local", root="/srv/files")
        LocalFSConfig(type='local', root='/srv/files')
    """
    if type == "zip":
        path = kwargs.pop("path", "")
        if kwargs:
            raise ValueError(f"Unexpected arguments for zip fs: {list(kwargs.keys())}")
        if not path:
            raise ValueError("Zip filesystem requires 'path' parameter")
        return ZipFSConfig(path=path)

    elif type == "local":
        root = kwargs.pop("root", "")
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for local fs: {list(kwargs.keys())}"
            )
        if not root:
            raise ValueError("Local filesystem requires 'root' parameter")
        return LocalFSConfig(root=root)

    elif type == "union":
        layers = list(kwargs.pop("layers", []))
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for union fs: {list(kwargs.keys())}"
            )
        if not layers:
            raise ValueError("Union filesystem requires a non-empty 'layers' parameter")
        return UnionFSConfig(layers=layers)

    else:
        raise ValueError(
            f"Unsupported filesystem type: {type}. Use 'zip', 'local' or 'union'."
        )


def open_fs(config: FSConfig) -> Reader:
    """Build the reader described by ``config``.

    A zip reader opened this way owns its archive file and closes it in
    close().

    Raises:
        OpenError: If a zip archive cannot be opened.
        ValueError: If a local root is not a directory.
    """
    if isinstance(config, ZipFSConfig):
        try:
            f = io.open(config.path, "rb")
        except OSError as e:
            raise OpenError(f"cannot open archive {config.path!r}: {e}") from e
        try:
            return open_zip(f, close_stream=True)
        except BaseException:
            f.close()
            raise

    if isinstance(config, LocalFSConfig):
        return LocalFS(config.root)

    if isinstance(config, UnionFSConfig):
        layers: list[Reader] = []
        try:
            for layer in config.layers:
                layers.append(open_fs(layer))
        except BaseException:
            for opened in layers:
                opened.close()  # type: ignore[attr-defined]
            raise
        return UnionFS(layers)

    raise ValueError(f"Unsupported filesystem config: {config!r}")
