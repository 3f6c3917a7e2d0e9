"""Async Redis double used in place of a live server."""

from __future__ import annotations

from redis.exceptions import ConnectionError as RedisConnectionError


class InMemoryRedis:
    """Lightweight async Redis double covering the commands storage uses."""

    def __init__(self, *, reachable: bool = True) -> None:
        self.store: dict[str, bytes] = {}
        self.reachable = reachable
        self.closed = False
        self.urls: list[str] = []

    async def ping(self) -> bool:
        if not self.reachable:
            raise RedisConnectionError("Connection refused")
        return True

    async def get(self, key: str) -> bytes | None:
        return self.store.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.store[key] = value

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self.store.pop(key, None)

    async def aclose(self) -> None:
        self.closed = True
