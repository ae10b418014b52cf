# core/cache.py

import threading
import time


class Cache:
    """
    In-memory key/value store where every entry expires `ttl_seconds` after it is set.
    Expiry is checked on read and expired entries are swept on every write,
    so memory stays bounded by traffic within one TTL window.
    Single-process only.
    """

    def __init__(self, ttl_seconds: float, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def _expired(self, expires_at: float) -> bool:
        return self.clock() >= expires_at

    def _sweep(self):
        for key in [k for k, (_, expires_at) in self._entries.items() if self._expired(expires_at)]:
            del self._entries[key]

    def set(self, key: str, data):
        with self._lock:
            self._sweep()
            self._entries[key] = (data, self.clock() + self.ttl_seconds)

    def get(self, key: str):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            data, expires_at = entry
            if self._expired(expires_at):
                del self._entries[key]
                return None
            return data

    def pop(self, key: str):
        """
        Remove and return a live entry. The key is gone afterwards even if it had expired.
        """
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is None:
                return None
            data, expires_at = entry
            return None if self._expired(expires_at) else data

    def __len__(self):
        with self._lock:
            self._sweep()
            return len(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()
