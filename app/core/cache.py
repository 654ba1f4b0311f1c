"""TTL cache matching keys through a pluggable comparator."""

import time
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[K, V]):
    key: K
    value: V
    expires_at: float


def _default_compare(a, b) -> bool:
    return a == b


class ResultCache(Generic[K, V]):
    """Small cache whose keys need not be hashable.

    Keys are compared with ``compare`` instead of hashing, so lookups are a
    linear scan. Entries expire ``ttl`` seconds after insertion and are evicted
    lazily the next time they are looked at. There is no size bound.
    """

    def __init__(
        self,
        compare: Callable[[K, K], bool] | None = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._compare = compare or _default_compare
        self._timer = timer
        self._entries: List[CacheEntry[K, V]] = []

    def set_compare(self, compare: Callable[[K, K], bool]) -> None:
        self._compare = compare

    def _find(self, key: K) -> Optional[int]:
        now = self._timer()
        for index, entry in enumerate(self._entries):
            if not self._compare(entry.key, key):
                continue
            if entry.expires_at <= now:
                del self._entries[index]
                return None
            return index
        return None

    def has(self, key: K) -> bool:
        return self._find(key) is not None

    def get(self, key: K) -> Optional[V]:
        index = self._find(key)
        if index is None:
            return None
        return self._entries[index].value

    def set(self, key: K, value: V, ttl: float) -> None:
        """Store ``value`` for ``ttl`` seconds, replacing a matching entry."""
        index = self._find(key)
        entry = CacheEntry(key=key, value=value, expires_at=self._timer() + ttl)
        if index is None:
            self._entries.append(entry)
        else:
            self._entries[index] = entry

    def delete(self, key: K) -> None:
        index = self._find(key)
        if index is not None:
            del self._entries[index]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
