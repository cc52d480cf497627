import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class ClientLockRegistry:
    """
    Per-client mutex registry.

    Serializes read-check-write sequences against a single client record
    inside this process. Row locks (SELECT ... FOR UPDATE) cover the
    multi-process case on backends that support them; SQLite does not,
    so this registry is what keeps concurrent transitions on the same
    client from double-advancing there.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, client_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(client_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[client_id] = lock
            return lock

    @contextmanager
    def hold(self, client_id: str) -> Iterator[None]:
        """
        Hold the lock for ``client_id`` for the duration of the block.

        Args:
            client_id: Client ID to serialize on
        """
        lock = self._lock_for(client_id)
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every service that writes client records in this process
client_locks = ClientLockRegistry()
