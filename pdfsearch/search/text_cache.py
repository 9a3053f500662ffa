"""
Bounded in-memory cache of extracted document text.

Keeps extracted text (a whole-document string or a list of page strings)
keyed by document path so repeated searches over the same folder skip
extraction. Entries are never invalidated by file changes; callers that
need fresh text use discard() or clear().
"""

import threading
from collections import OrderedDict
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..core import get_config, get_logger, ConfigurationError

logger = get_logger(__name__)


CachedText = Union[str, List[str]]

EVICTION_POLICIES = ("insert_if_room", "lru")


class ReadWriteLock:
    """
    Many concurrent readers or one exclusive writer.

    Waiting writers block new readers so a steady stream of cache hits
    cannot starve inserts.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TextCache:
    """
    Thread-safe, capacity-bounded text cache.

    Two policies are supported:
      - "insert_if_room": once full, new documents are not cached and
        existing entries are kept.
      - "lru": once full, the least recently used entry is evicted.
    """

    def __init__(self, capacity: int = None, eviction_policy: str = None):
        """
        Initialize the cache.

        Args:
            capacity: Maximum number of entries. Defaults to config value.
            eviction_policy: "insert_if_room" or "lru". Defaults to config value.
        """
        if capacity is None or eviction_policy is None:
            config = get_config()
            capacity = config.cache.capacity if capacity is None else capacity
            eviction_policy = eviction_policy or config.cache.eviction_policy

        if eviction_policy not in EVICTION_POLICIES:
            raise ConfigurationError(f"Unknown cache eviction policy: {eviction_policy}")

        if capacity < 0:
            raise ConfigurationError(f"Cache capacity must not be negative: {capacity}")

        self.capacity = capacity
        self.eviction_policy = eviction_policy

        self._entries: "OrderedDict[str, CachedText]" = OrderedDict()
        self._lock = ReadWriteLock()
        self._stats_lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(path: Union[str, Path]) -> str:
        return str(path)

    def get(self, path: Union[str, Path]) -> Optional[CachedText]:
        """
        Look up cached text for a document.

        Args:
            path: Document path.

        Returns:
            A copy of the cached value, or None on a miss.
        """
        key = self._key(path)

        if self.eviction_policy == "lru":
            # Recency bookkeeping mutates the ordering
            with self._lock.write_locked():
                value = self._entries.get(key)
                if value is not None:
                    self._entries.move_to_end(key)
        else:
            with self._lock.read_locked():
                value = self._entries.get(key)

        with self._stats_lock:
            if value is None:
                self.misses += 1
            else:
                self.hits += 1

        if isinstance(value, list):
            return list(value)
        return value

    def put(self, path: Union[str, Path], text: CachedText) -> bool:
        """
        Store extracted text.

        An existing key is always replaced. A new key is inserted only if
        there is room, or, under the LRU policy, after evicting the least
        recently used entry.

        Args:
            path: Document path.
            text: Whole-document string or list of page strings.

        Returns:
            True if the value is now cached.
        """
        key = self._key(path)
        value = list(text) if isinstance(text, list) else text

        with self._lock.write_locked():
            if key in self._entries:
                self._entries[key] = value
                self._entries.move_to_end(key)
                return True

            if self.capacity == 0:
                return False

            if len(self._entries) >= self.capacity:
                if self.eviction_policy != "lru":
                    logger.debug(f"Cache full ({self.capacity}), not caching: {key}")
                    return False

                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted from cache: {evicted}")

            self._entries[key] = value
            return True

    def discard(self, path: Union[str, Path]) -> bool:
        """Drop one entry. Returns True if it was present."""
        with self._lock.write_locked():
            return self._entries.pop(self._key(path), None) is not None

    def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        with self._lock.write_locked():
            self._entries.clear()

        with self._stats_lock:
            self.hits = 0
            self.misses = 0

    def __contains__(self, path: Union[str, Path]) -> bool:
        with self._lock.read_locked():
            return self._key(path) in self._entries

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)


if __name__ == "__main__":
    cache = TextCache(capacity=2, eviction_policy="insert_if_room")
    cache.put("/docs/a.pdf", ["page one", "page two"])
    cache.put("/docs/b.pdf", "whole text")
    print(f"Inserted third: {cache.put('/docs/c.pdf', 'ignored')}")
    print(f"Size: {len(cache)}, has c: {'/docs/c.pdf' in cache}")

    lru = TextCache(capacity=2, eviction_policy="lru")
    lru.put("/docs/a.pdf", "a")
    lru.put("/docs/b.pdf", "b")
    lru.get("/docs/a.pdf")
    lru.put("/docs/c.pdf", "c")
    print(f"LRU keeps a: {'/docs/a.pdf' in lru}, keeps b: {'/docs/b.pdf' in lru}")
