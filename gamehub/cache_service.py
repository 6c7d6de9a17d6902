"""Periodic saving of cached table rows."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Hashable

_log = logging.getLogger(__name__)

SAVE_INTERVAL = 10.0
"""Default seconds between save passes."""


class TableCacheService:
    """Keeps a save function per cached object and calls them all on a timer."""

    def __init__(self) -> None:
        self._funcs: dict[Hashable, Callable[[], object]] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def add(self, key: Hashable, save_func: Callable[[], object]) -> None:
        with self._lock:
            self._funcs[key] = save_func
            _log.info("add cache key:%r, size:%d", key, len(self._funcs))

    def remove(self, key: Hashable) -> None:
        with self._lock:
            self._funcs.pop(key, None)
            _log.info("delete key:%r from cache, size:%d", key, len(self._funcs))

    def clear(self) -> None:
        with self._lock:
            self._funcs = {}

    def save_all(self) -> int:
        """Call every save function; returns how many completed without error."""
        with self._lock:
            funcs = list(self._funcs.values())
        done = 0
        for func in funcs:
            try:
                func()
            except Exception:
                _log.exception("cache save failed")
            else:
                done += 1
        return done

    def _loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            _log.info("tickSaveData: size:%d", len(self))
            self.save_all()

    def start(self, interval: float = SAVE_INTERVAL) -> None:
        """Save everything every ``interval`` seconds in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, args=(interval,), name="table-cache", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._funcs)