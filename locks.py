# locks.py
"""Per-file mutual exclusion for chunk writes.

One coarse lock guards the identifier -> entry map; each entry owns the lock
that serializes writers for that identifier. Entries are reference counted
(holders plus waiters) and dropped from the map once nobody holds or awaits
them, so the map only contains identifiers with in-flight requests.

There is no timeout: a writer that never releases blocks every later request
for the same identifier.
"""
import logging
import threading
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class _Entry:
    __slots__ = ("lock", "refs")

    def __init__(self):
        self.lock = threading.Lock()
        self.refs = 0


class LockHandle:
    """Proof of exclusive access to one identifier, returned by acquire()."""

    __slots__ = ("identifier", "_entry", "released")

    def __init__(self, identifier: str, entry: _Entry):
        self.identifier = identifier
        self._entry = entry
        self.released = False

    def __repr__(self):
        state = "released" if self.released else "held"
        return f"<LockHandle {self.identifier!r} {state}>"


class LockRegistry:
    def __init__(self):
        self._guard = threading.Lock()
        self._entries = {}

    def __len__(self):
        with self._guard:
            return len(self._entries)

    def __contains__(self, identifier):
        with self._guard:
            return identifier in self._entries

    def acquire(self, identifier: str) -> LockHandle:
        with self._guard:
            entry = self._entries.get(identifier)
            if entry is None:
                entry = self._entries[identifier] = _Entry()
            entry.refs += 1

        # wait outside the guard so other identifiers are not held up
        entry.lock.acquire()
        logger.debug("lock acquired for %s", identifier)
        return LockHandle(identifier, entry)

    def release(self, handle: LockHandle) -> None:
        if handle.released:
            raise RuntimeError(f"lock for {handle.identifier!r} already released")
        handle.released = True
        entry = handle._entry
        entry.lock.release()

        with self._guard:
            entry.refs -= 1
            if entry.refs == 0 and self._entries.get(handle.identifier) is entry:
                del self._entries[handle.identifier]
        logger.debug("lock released for %s", handle.identifier)

    @contextmanager
    def hold(self, identifier: str):
        handle = self.acquire(identifier)
        try:
            yield handle
        finally:
            self.release(handle)
