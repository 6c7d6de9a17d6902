"""Repeating timed tasks driven by a background scheduler."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from gamehub.timeutils import now_millis
from gamehub.unique_list import UniqueList

_log = logging.getLogger(__name__)

TICK_INTERVAL = 0.1
"""Seconds between scheduler passes."""


class Task:
    """A function run every ``duration`` milliseconds, at most ``max_times`` times.

    ``max_times`` of -1 means no limit. The function receives the task's
    arguments and returns a true value to keep running.
    """

    def __init__(
        self,
        name: str,
        func: Callable[..., Any],
        duration: int,
        max_times: int = -1,
        args: tuple = (),
    ) -> None:
        self.name = name
        self.func = func
        self.duration = duration
        self.max_times = max_times
        self.args = tuple(args)
        self.last_time = 0

    def run(self) -> bool:
        """Run once; returns False when the task is used up or asks to stop."""
        self.last_time = now_millis()
        if self.max_times > 0:
            self.max_times -= 1
        elif self.max_times == 0:
            return False
        return bool(self.func(*self.args))

    def can_run(self) -> bool:
        return now_millis() - self.last_time >= self.duration

    def can_remove(self) -> bool:
        return self.max_times == 0

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, duration={self.duration}, max_times={self.max_times})"


class TaskScheduler:
    """Holds tasks and runs those that are due on every tick."""

    def __init__(self, interval: float = TICK_INTERVAL) -> None:
        self.interval = interval
        self._tasks: UniqueList[Task] = UniqueList()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def add(self, task: Task) -> bool:
        """Add a task if it is due now; returns whether it was added."""
        if not task.can_run():
            return False
        with self._lock:
            self._tasks.add(task)
        return True

    def remove(self, task: Task) -> None:
        with self._lock:
            self._tasks.remove(task)

    def create_task(self, name: str, duration: int, func: Callable[..., Any], *args) -> Task:
        """Create an unlimited repeating task and schedule it."""
        task = Task(name, func, duration, -1, args)
        self.add(task)
        return task

    def tick(self) -> None:
        """Run every due task once and drop finished ones."""
        with self._lock:
            tasks = list(self._tasks)
        for task in tasks:
            if task.can_remove():
                self.remove(task)
                continue
            if task.can_run():
                try:
                    keep = task.run()
                except Exception:
                    _log.exception("task %s failed", task.name)
                    keep = False
                if not keep:
                    self.remove(task)
                _log.debug("task %s run", task.name)

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self.interval)

    def start(self) -> None:
        """Start ticking in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="task-scheduler", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)