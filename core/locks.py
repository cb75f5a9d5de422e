"""Per-key locking for the in-process stores."""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


class KeyedLock:
    """
    Hands out one re-entrant lock per key.

    Callers holding different keys never wait on each other; the registry
    lock is only held long enough to look up or release the per-key lock.
    A key's lock is dropped once nobody holds or waits on it, so the
    registry only ever contains keys that are in use.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._locks: Dict[Hashable, _KeyLock] = {}

    def _acquire_entry(self, key: Hashable) -> _KeyLock:
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = _KeyLock()
                self._locks[key] = entry
            entry.users += 1
            return entry

    def _release_entry(self, key: Hashable, entry: _KeyLock) -> None:
        with self._registry_lock:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
