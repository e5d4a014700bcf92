"""Shared test fixtures: an in-memory stand-in for the Redis client."""

import threading

import pytest
import redis
from fastapi.testclient import TestClient

from clicktracker.app import create_app
from clicktracker.store import ClickStore


class MemoryRedis:
    """The handful of Redis list commands the store uses, kept in memory.

    Set ``down = True`` to make every call fail the way a dropped
    connection does.
    """

    def __init__(self) -> None:
        self.lists = {}
        self.down = False
        self.closed = False
        self._lock = threading.Lock()

    def _check(self) -> None:
        if self.down:
            raise redis.ConnectionError("Connection refused")

    def ping(self) -> bool:
        self._check()
        return True

    def rpush(self, key, *values) -> int:
        self._check()
        with self._lock:
            items = self.lists.setdefault(key, [])
            items.extend(v.encode() if isinstance(v, str) else v for v in values)
            return len(items)

    def lrange(self, key, start, end):
        self._check()
        with self._lock:
            items = list(self.lists.get(key, []))
        return items[start:] if end == -1 else items[start:end + 1]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> MemoryRedis:
    return MemoryRedis()


@pytest.fixture
def store(fake_redis) -> ClickStore:
    return ClickStore(fake_redis, key="clicks")


@pytest.fixture
def client(store):
    """TestClient with lifespan run, so the store is connected first."""
    with TestClient(create_app(store=store)) as c:
        yield c
