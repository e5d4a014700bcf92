"""Redis-backed store for click events.

The ``clicks`` collection is a Redis list; every element is one JSON encoded
``ClickEvent``. RPUSH and LRANGE are atomic per command, so a read running
alongside an insert sees the list either before or after it, never half of it.
"""

import logging
from typing import List, Optional

import redis
from pydantic import ValidationError

from .clicks import ClickEvent

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store cannot be reached or returns unusable data."""


class ClickStore:
    """Insert and read-all over a single Redis list.

    One instance is built at startup and shared by every request; the
    underlying ``redis.Redis`` keeps its own connection pool.
    """

    def __init__(self, client: redis.Redis, key: str = "clicks") -> None:
        self._r = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = "clicks", timeout: Optional[float] = None) -> "ClickStore":
        client = redis.Redis.from_url(
            url,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            decode_responses=False,
        )
        return cls(client, key=key)

    def connect(self) -> None:
        """Verify the store answers; raise ``StoreError`` if it does not."""
        try:
            self._r.ping()
        except redis.RedisError as e:
            raise StoreError(f"store unreachable: {e}") from e
        logger.info("Connected to store, collection '%s'", self.key)

    def ping(self) -> bool:
        try:
            return bool(self._r.ping())
        except redis.RedisError:
            return False

    def insert(self, event: ClickEvent) -> None:
        try:
            self._r.rpush(self.key, event.model_dump_json())
        except redis.RedisError as e:
            raise StoreError(f"insert failed: {e}") from e
        logger.debug("Recorded click at %s", event.clickTime.isoformat())

    def all(self) -> List[ClickEvent]:
        """Return every stored click in insertion order."""
        try:
            raw = self._r.lrange(self.key, 0, -1)
        except redis.RedisError as e:
            raise StoreError(f"read failed: {e}") from e
        try:
            return [ClickEvent.model_validate_json(item) for item in raw]
        except ValidationError as e:
            # never hand back a partial list
            raise StoreError(f"corrupt click record in '{self.key}': {e}") from e

    def close(self) -> None:
        self._r.close()
