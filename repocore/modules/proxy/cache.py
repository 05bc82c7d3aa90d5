"""Remembers remote URLs that failed recently."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

log = logging.getLogger(__name__)


class UrlFailureCache:
    """Thread-safe, size-bounded map of failed URL -> expiry time."""

    MAX_CACHE_SIZE = 10_000

    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        max_entries: int = MAX_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._failures: "OrderedDict[str, float]" = OrderedDict()

    def cache_failure(self, url: str) -> None:
        with self._lock:
            self._failures[url] = self._clock() + self.ttl_seconds
            self._failures.move_to_end(url)
            while len(self._failures) > self.max_entries:
                self._failures.popitem(last=False)
        log.debug("Cached failure url=%s ttl=%ss", url, self.ttl_seconds)

    def has_failed_before(self, url: str) -> bool:
        with self._lock:
            expiry = self._failures.get(url)
            if expiry is None:
                return False
            if expiry <= self._clock():
                del self._failures[url]
                return False
            return True

    def clear(self) -> None:
        with self._lock:
            self._failures.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._failures)
