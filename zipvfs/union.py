"""Composite reader layering several filesystems."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import IO, Any

from .base import FileMetadata, Reader
from .errors import NotFoundError

logger = logging.getLogger(__name__)


class UnionFS:
    """Ordered stack of readers presented as one filesystem.

    Lookups try each layer in order and the first layer holding the path
    wins. Glob results from all layers are merged in layer order with
    duplicates removed.
    """

    def __init__(self, layers: Sequence[Reader]):
        if not layers:
            raise ValueError("UnionFS requires at least one layer")
        self.layers = list(layers)

    def _layer_for(self, path: str) -> Reader:
        for i, layer in enumerate(self.layers):
            try:
                layer.stat(path)
            except NotFoundError:
                continue
            if i:
                logger.debug("%r resolved in layer %d", path, i)
            return layer
        raise NotFoundError(path)

    def stat(self, path: str) -> FileMetadata:
        """Get metadata from the first layer holding ``path``."""
        return self._layer_for(path).stat(path)

    def open(self, path: str) -> IO[bytes]:
        """Open ``path`` from the first layer holding it."""
        return self._layer_for(path).open(path)

    def glob(self, pattern: str) -> list[str]:
        """Merge the glob results of every layer, first occurrence first."""
        seen: set[str] = set()
        names = []
        for layer in self.layers:
            for name in layer.glob(pattern):
                if name not in seen:
                    seen.add(name)
                    names.append(name)
        return names

    def exists(self, path: str) -> bool:
        try:
            self._layer_for(path)
        except NotFoundError:
            return False
        return True

    def isdir(self, path: str) -> bool:
        return self.exists(path) and self.stat(path).is_dir

    def isfile(self, path: str) -> bool:
        return self.exists(path) and not self.stat(path).is_dir

    def read(self, path: str) -> bytes:
        with self.open(path) as f:
            return f.read()

    def close(self) -> None:
        """Close every layer that can be closed."""
        for layer in self.layers:
            close: Any = getattr(layer, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> UnionFS:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
