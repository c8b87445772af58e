"""Stores for rendered avatars.

A store maps a cache key (``{color_key}_{char}_{side}``) to PNG bytes. The
renderer never touches a store directly; :func:`grid_avatar.avatar.get_or_create`
consults one and falls back to rendering on a miss.
"""

import os
import tempfile
from typing import Optional, Protocol

from loguru import logger
from pyrsistent import pmap
from pyrsistent.typing import PMap

from grid_avatar.types import CacheKey

FILE_EXTENSION = ".png"


class AvatarStore(Protocol):
    def get(self, key: CacheKey) -> Optional[bytes]: ...

    def put(self, key: CacheKey, data: bytes) -> None: ...


class MemoryStore:
    """In-process store backed by a persistent map."""

    def __init__(self) -> None:
        self._entries: PMap[CacheKey, bytes] = pmap()

    def get(self, key: CacheKey) -> Optional[bytes]:
        return self._entries.get(key)

    def put(self, key: CacheKey, data: bytes) -> None:
        self._entries = self._entries.set(key, data)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class FileStore:
    """
    One PNG file per key inside ``directory``.

    Writes land in a temporary file first and are moved into place with
    ``os.replace``, so readers never observe a partially written avatar even
    when two requests render the same key at once.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def path(self, key: CacheKey) -> str:
        if os.sep in key or (os.altsep and os.altsep in key) or key.startswith("."):
            raise ValueError(f"Invalid cache key: {key!r}")
        return os.path.join(self.directory, key + FILE_EXTENSION)

    def get(self, key: CacheKey) -> Optional[bytes]:
        path = self.path(key)
        if not os.path.isfile(path):
            return None
        with open(path, "rb") as f:
            return f.read()

    def put(self, key: CacheKey, data: bytes) -> None:
        path = self.path(key)
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=self.directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.info("Stored avatar {}", path)
