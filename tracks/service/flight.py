"""
Per-key in-flight locks.

Lets concurrent requests for the same cache entry run the pipeline one at a
time while requests for different entries proceed in parallel.
"""

import threading
from contextlib import contextmanager


class KeyedLocks:
    """Registry of one lock per key, dropped once nobody holds or waits on it"""

    def __init__(self):
        self._lock = threading.Lock()
        # key -> [lock, holders + waiters]
        self._entries = {}

    @contextmanager
    def hold(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self):
        with self._lock:
            return len(self._entries)
