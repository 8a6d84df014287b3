from __future__ import annotations

import threading

ROOT_CONTAINER_ID = 0


class IdentityAllocator:
    """Hands out node identities for one compilation.

    Identities start at 1 and strictly increase. 0 is reserved for the
    top-level container. The increment is taken under a lock so a shared
    instance never returns the same identity twice.
    """

    def __init__(self, start: int = 1) -> None:
        if start <= ROOT_CONTAINER_ID:
            raise ValueError("start must be > 0")
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            identity = self._next
            self._next += 1
        return identity
