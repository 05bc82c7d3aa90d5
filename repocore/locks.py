"""Per-path mutual exclusion for metadata writers."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator

log = logging.getLogger(__name__)


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class PathLockRegistry:
    """Hands out one re-entrant lock per key; idle keys are forgotten."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[str, _Entry] = {}

    @staticmethod
    def key_for(repository_id: str, path: str) -> str:
        return f"{repository_id}:{path.lstrip('/')}"

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1
        started = time.monotonic()
        entry.lock.acquire()
        waited_ms = (time.monotonic() - started) * 1000
        if waited_ms > 100:
            log.debug("Waited %.1fms for lock key=%s", waited_ms, key)
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
