import pytest

from gamehub.handlers import HandlerNotFoundError, HandlerRegistry


def login(msg, channel):
    return True, msg


def test_register_and_get():
    registry = HandlerRegistry()
    registry.register(100, login)
    assert registry.get(100) is login
    assert 100 in registry
    assert 101 not in registry


def test_missing_handler_raises():
    registry = HandlerRegistry()
    with pytest.raises(HandlerNotFoundError) as info:
        registry.get(7)
    assert info.value.cmd == 7


def test_register_replaces():
    registry = HandlerRegistry()
    other = lambda msg, channel: (False, None)
    registry.register(100, login)
    registry.register(100, other)
    assert registry.get(100) is other
    assert len(registry) == 1