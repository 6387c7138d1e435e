"""Result cache contract and a thread-safe in-memory implementation."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Protocol

from promptsmith.config import CacheConfig
from promptsmith.serialization import dump_json, load_json
from promptsmith.types import ProcessResult


class ResultCache(Protocol):
    def get(self, key: str) -> ProcessResult | None:
        """Return the stored result or None on miss or expiry."""

    def set(self, key: str, value: ProcessResult, ttl_seconds: int) -> None:
        """Store `value` for `ttl_seconds`."""


class InMemoryResultCache:
    """LRU-bounded TTL cache that stores results as serialized JSON.

    Values are serialized on write and rebuilt on read, so callers never share
    a mutable object with the cache.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or CacheConfig()
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, str]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> ProcessResult | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at <= now:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
        return load_json(ProcessResult, payload)

    def set(self, key: str, value: ProcessResult, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        payload = dump_json(value)
        expires_at = self._clock() + ttl_seconds
        with self._lock:
            self._entries[key] = (expires_at, payload)
            self._entries.move_to_end(key)
            while len(self._entries) > self.config.max_entries:
                self._entries.popitem(last=False)

    def ttl_remaining(self, key: str) -> float | None:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        return max(0.0, entry[0] - self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
