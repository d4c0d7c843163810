from __future__ import annotations

import threading


class HitCounter:
    """Counts file-server hits; shared by every request thread."""

    def __init__(self) -> None:
        self._hits = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0
