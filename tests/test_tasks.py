import threading

from gamehub.tasks import Task, TaskScheduler
from gamehub.timeutils import now_millis


def test_task_passes_args_and_returns_result():
    seen = []
    task = Task("t", lambda a, b: seen.append((a, b)) or True, 0, args=("x", 5))
    assert task.run() is True
    assert seen == [("x", 5)]


def test_task_limited_times():
    task = Task("t", lambda: True, 0, max_times=2)
    assert task.run() is True
    assert task.run() is True
    assert task.can_remove() is True
    assert task.run() is False


def test_can_run_after_recent_run():
    task = Task("t", lambda: True, 60_000)
    assert task.can_run() is True
    task.run()
    assert task.can_run() is False


def test_create_task_registers():
    scheduler = TaskScheduler()
    task = scheduler.create_task("a", 0, lambda: True)
    assert len(scheduler) == 1
    scheduler.remove(task)
    assert len(scheduler) == 0


def test_add_rejects_task_not_due():
    scheduler = TaskScheduler()
    task = Task("late", lambda: True, now_millis() * 2)
    assert scheduler.add(task) is False
    assert len(scheduler) == 0


def test_tick_removes_task_returning_false():
    calls = []
    scheduler = TaskScheduler()
    scheduler.create_task("once", 0, lambda: calls.append(1) or False)
    scheduler.tick()
    assert calls == [1]
    assert len(scheduler) == 0


def test_tick_keeps_task_returning_true():
    calls = []
    scheduler = TaskScheduler()
    scheduler.create_task("keep", 0, lambda: calls.append(1) or True)
    scheduler.tick()
    scheduler.tick()
    assert calls == [1, 1]
    assert len(scheduler) == 1


def test_background_run():
    fired = threading.Event()
    scheduler = TaskScheduler(interval=0.01)
    scheduler.create_task("bg", 0, lambda: fired.set() or True)
    scheduler.start()
    try:
        assert fired.wait(2)
    finally:
        scheduler.stop()