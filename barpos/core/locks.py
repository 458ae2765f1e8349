"""
Keyed mutual exclusion for lifecycle operations

One lock per key (a table id), created on first use. Operations on the same
table queue behind each other; operations on different tables never contend.
"""

from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Optional
import threading

import structlog

from barpos.core.config import get_settings
from barpos.core.exceptions import TableBusyError

logger = structlog.get_logger(__name__)


class KeyedLockRegistry:
    """Registry of per-key locks"""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def lock_for(self, key: Hashable) -> threading.Lock:
        """Return the lock for key, creating it if needed"""
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable, timeout: Optional[float] = None) -> Iterator[None]:
        """Hold the lock for key; raise TableBusyError if it is not acquired in time"""
        lock = self.lock_for(key)
        wait = self.timeout if timeout is None else timeout
        if not lock.acquire(timeout=wait):
            logger.warning("Lock wait timed out", key=str(key), timeout=wait)
            raise TableBusyError("Table is busy, try again", key=key)
        try:
            yield
        finally:
            lock.release()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_registry: Optional[KeyedLockRegistry] = None
_registry_guard = threading.Lock()


def get_table_locks() -> KeyedLockRegistry:
    """Process-wide registry shared by every request thread"""
    global _registry
    with _registry_guard:
        if _registry is None:
            _registry = KeyedLockRegistry(timeout=get_settings().LOCK_TIMEOUT_SECONDS)
        return _registry
