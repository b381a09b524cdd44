"""
TTL cache for SmartThings API responses.

Entries are replaced wholesale, never mutated in place. No locks are
taken: every operation is synchronous between awaits on the single event
loop, and each key owns an independent slot.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger("homedeck.capabilities.state_cache")

T = TypeVar("T")
Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached payload with the time it was stored."""

    data: T
    timestamp: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.timestamp < ttl


class ResponseCache(Generic[T]):
    """
    Keyed TTL cache.

    Features:
    - O(1) lookups by key
    - Per-key generation counter, bumped on invalidation, so a fetch that
      started before an invalidation cannot store its stale result
    """

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic, name: str = "cache"):
        self._entries: dict[Hashable, CacheEntry[T]] = {}
        self._generations: dict[Hashable, int] = {}
        self._ttl = ttl_seconds
        self._clock = clock
        self._name = name

    def get(self, key: Hashable) -> Optional[CacheEntry[T]]:
        """Get the entry for key, None if not cached or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if not entry.is_fresh(self._clock(), self._ttl):
            logger.debug("%s expired: %s", self._name, key)
            return None

        return entry

    def generation(self, key: Hashable) -> int:
        return self._generations.get(key, 0)

    def put(self, key: Hashable, data: T, generation: Optional[int] = None) -> bool:
        """
        Store data under key with the current timestamp.

        When generation is given and the key has been invalidated since it
        was read, the write is dropped and False is returned.
        """
        if generation is not None and generation != self.generation(key):
            logger.debug("%s discarded stale write: %s", self._name, key)
            return False
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock())
        return True

    def invalidate(self, key: Hashable) -> None:
        """Drop the entry for key and fence off in-flight writes to it."""
        self._entries.pop(key, None)
        # Generations outlive their entries: resetting one to 0 would let a
        # fetch that began before an earlier invalidation match again. One
        # int per device id; the gateway replaces the whole cache on clear.
        self._generations[key] = self.generation(key) + 1
        logger.debug("%s invalidated: %s", self._name, key)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    @property
    def size(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(self._entries)
