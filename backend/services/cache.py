"""In-memory expiring key-value cache for WordPress responses.

Note: Each uvicorn worker (and each warm serverless instance) has its own
cache. Expired entries are evicted lazily on read; nothing sweeps in the
background unless purge_expired() is called.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

DEFAULT_TTL_SECONDS = 300


class CacheManager:
    """Per-key TTL cache with an optional LRU capacity bound."""

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        # key -> (expires_at, value), oldest use first
        self._store: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.RLock()

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key, replacing any previous entry wholesale."""
        if ttl is None:
            ttl = self.default_ttl
        with self._lock:
            self._store.pop(key, None)
            if self.max_entries is not None and len(self._store) >= self.max_entries:
                self._purge_expired_locked()
                while len(self._store) >= self.max_entries:
                    self._store.popitem(last=False)
            self._store[key] = (self._clock() + ttl, value)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def purge_expired(self) -> int:
        """Drop every expired entry now. Returns how many were removed."""
        with self._lock:
            return self._purge_expired_locked()

    def _purge_expired_locked(self) -> int:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._store.items() if now >= expires_at]
        for key in expired:
            del self._store[key]
        return len(expired)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return False
            if self._clock() >= entry[0]:
                del self._store[key]
                return False
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
