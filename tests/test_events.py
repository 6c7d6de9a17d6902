from gamehub.events import EventProcess, EventType


def test_listeners_called_in_order_with_args():
    calls = []
    process = EventProcess()
    process.register(EventType.LOGIN, lambda t, *a: calls.append(("first", t, a)))
    process.register(EventType.LOGIN, lambda t, *a: calls.append(("second", t, a)))
    process.handle(EventType.LOGIN, "player")
    assert calls == [
        ("first", EventType.LOGIN, ("player",)),
        ("second", EventType.LOGIN, ("player",)),
    ]


def test_unregistered_type_does_nothing():
    calls = []
    process = EventProcess()
    process.register(EventType.LOGIN, lambda t, *a: calls.append(t))
    process.handle(EventType.LOGOUT)
    assert calls == []


def test_listeners_for_several_types():
    calls = []
    process = EventProcess()
    process.register(EventType.CREATE_ROLE, lambda t, *a: calls.append(("create", t, a)))
    process.register(EventType.LOGIN, lambda t, *a: calls.append(("login", t, a)))
    process.handle(EventType.CREATE_ROLE, 1)
    process.handle(EventType.LOGIN, 2)
    assert calls == [
        ("create", EventType.CREATE_ROLE, (1,)),
        ("login", EventType.LOGIN, (2,)),
    ]