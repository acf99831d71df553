"""Root conftest: shared fixtures for all tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env at the root so local runs pick up the same settings as the bot.
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


class FakeRedis:
    """In-memory stand-in for cache.client.RedisClient.

    Keys with a TTL really expire: ``advance(seconds)`` moves the fake clock
    and any key past its deadline disappears on the next access. ``ttls``
    keeps the last TTL set per key for assertions.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.now = 0.0
        self._expires_at: dict[str, float] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _purge(self, key: str) -> None:
        deadline = self._expires_at.get(key)
        if deadline is not None and self.now >= deadline:
            self.store.pop(key, None)
            self._expires_at.pop(key, None)

    async def get(self, key: str) -> str | None:
        self._purge(key)
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None, nx: bool = False) -> str | None:
        self._purge(key)
        if nx and key in self.store:
            return None
        self.store[key] = value
        self._expires_at.pop(key, None)
        if ex is not None:
            self.ttls[key] = ex
            self._expires_at[key] = self.now + ex
        return "OK"

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            self._purge(key)
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
            self._expires_at.pop(key, None)
        return removed

    async def delete_if_equals(self, key: str, value: str) -> bool:
        self._purge(key)
        if self.store.get(key) != value:
            return False
        self.store.pop(key, None)
        self.ttls.pop(key, None)
        self._expires_at.pop(key, None)
        return True

    async def incr(self, key: str) -> int:
        self._purge(key)
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value

    async def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self.store:
            return False
        self.ttls[key] = seconds
        self._expires_at[key] = self.now + seconds
        return True

    async def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.store:
            return -2
        deadline = self._expires_at.get(key)
        if deadline is None:
            return -1
        return int(deadline - self.now)

    async def ping(self) -> bool:
        return True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def user_id() -> int:
    return 123456
