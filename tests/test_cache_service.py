import threading

from gamehub.cache_service import TableCacheService


def test_add_remove_len():
    service = TableCacheService()
    service.add("a", lambda: None)
    service.add("b", lambda: None)
    assert len(service) == 2
    service.remove("a")
    service.remove("missing")
    assert len(service) == 1


def test_add_same_key_replaces():
    calls = []
    service = TableCacheService()
    service.add("k", lambda: calls.append("old"))
    service.add("k", lambda: calls.append("new"))
    service.save_all()
    assert calls == ["new"]


def test_save_all_survives_failure():
    calls = []

    def broken():
        raise RuntimeError("boom")

    service = TableCacheService()
    service.add("bad", broken)
    service.add("good", lambda: calls.append(1))
    assert service.save_all() == 1
    assert calls == [1]


def test_clear():
    service = TableCacheService()
    service.add("a", lambda: None)
    service.clear()
    assert len(service) == 0
    assert service.save_all() == 0


def test_background_saving():
    saved = threading.Event()
    service = TableCacheService()
    service.add("row", saved.set)
    service.start(0.01)
    try:
        assert saved.wait(2)
    finally:
        service.stop()