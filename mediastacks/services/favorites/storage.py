"""Key/value storage backends for the favorites document.

The favorites store only needs three byte-oriented operations, so each
backend is a thin wrapper around its medium. Tests use :class:`MemoryStorage`;
the service defaults to :class:`FileStorage`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from redis.asyncio import Redis

from mediastacks.cache import get_redis
from mediastacks.settings import AppSettings

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal async key/value interface consumed by the favorites store."""

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.data: dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FileStorage:
    """Store each key as a file under ``root``.

    Writes go to a temporary file in the same directory and are moved into
    place with :func:`os.replace`, so readers never observe a partial
    document.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def path_for(self, key: str) -> Path:
        return self._root / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    async def get(self, key: str) -> bytes | None:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set(self, key: str, value: bytes) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)

    @staticmethod
    def _read(path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, value: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class RedisStorage:
    """Store keys in Redis using the shared client from :mod:`mediastacks.cache`."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    async def get(self, key: str) -> bytes | None:
        return await self._client.get(key)

    async def set(self, key: str, value: bytes) -> None:
        await self._client.set(key, value)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)


async def build_storage(settings: AppSettings) -> StorageBackend:
    """Instantiate the backend selected by ``FAVORITES_BACKEND``."""

    backend = settings.favorites_backend
    logger.info("Using %s storage for favorites", backend)
    if backend == "memory":
        return MemoryStorage()
    if backend == "redis":
        return RedisStorage(await get_redis(settings.redis_url))
    return FileStorage(Path(settings.favorites_path))


__all__ = [
    "FileStorage",
    "MemoryStorage",
    "RedisStorage",
    "StorageBackend",
    "build_storage",
]
