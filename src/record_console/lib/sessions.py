"""
Bounded in-memory store for per-browser-session objects.

Entries live in process memory (they hold live engine objects, not
serializable data). The store is bounded two ways: entries idle for longer
than ``ttl`` seconds expire, and once ``max_entries`` is exceeded the least
recently used entry is dropped. Expiry is checked on access, so no
background task is needed.
"""

import os
import time
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

from record_console.lib import logs

LOG = logs.logger(__file__)

# Configuration from environment
MAX_SESSIONS = int(os.getenv("RECORD_CONSOLE_MAX_SESSIONS", "500"))
SESSION_TTL = float(os.getenv("RECORD_CONSOLE_SESSION_TTL", "3600"))

T = TypeVar("T")


class SessionStore(Generic[T]):
    """
    LRU map of session token to value with an idle timeout.

    Args:
        max_entries: Most entries kept at once.
        ttl: Seconds an entry may go unused before it expires. Zero or less
            disables expiry.
        on_evict: Called with each value dropped by the store (expired or
            pushed out), not with values removed through pop().
        clock: Monotonic time source.
    """

    def __init__(
        self,
        max_entries: int = MAX_SESSIONS,
        ttl: float = SESSION_TTL,
        on_evict: Callable[[T], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive: {max_entries}")
        self.max_entries = max_entries
        self.ttl = ttl
        self.on_evict = on_evict
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, T]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        self._expire()
        return key in self._entries

    def get(self, key: str) -> T | None:
        """Return the value for a key and mark it as recently used."""
        self._expire()
        entry = self._entries.get(key)
        if entry is None:
            return None
        value = entry[1]
        self._entries[key] = (self._clock(), value)
        self._entries.move_to_end(key)
        return value

    def peek(self, key: str) -> T | None:
        """Return the value for a key without touching its last use."""
        entry = self._entries.get(key)
        return None if entry is None else entry[1]

    def set(self, key: str, value: T) -> None:
        self._expire()
        self._entries[key] = (self._clock(), value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted_key, (_, evicted) = self._entries.popitem(last=False)
            LOG.info("Evicting least recently used session - key:%s", evicted_key)
            self._evicted(evicted)

    def pop(self, key: str) -> T | None:
        entry = self._entries.pop(key, None)
        return None if entry is None else entry[1]

    def _expire(self) -> None:
        if self.ttl <= 0:
            return
        cutoff = self._clock() - self.ttl
        # Oldest first, so stop at the first entry still in use
        while self._entries:
            key, (last_used, value) = next(iter(self._entries.items()))
            if last_used > cutoff:
                break
            del self._entries[key]
            LOG.info("Expiring idle session - key:%s", key)
            self._evicted(value)

    def _evicted(self, value: T) -> None:
        if self.on_evict is not None:
            self.on_evict(value)
