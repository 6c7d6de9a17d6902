"""Registry of message handlers keyed by command id."""

from __future__ import annotations

import logging
from typing import Any, Callable

_log = logging.getLogger(__name__)

Handler = Callable[..., Any]


class HandlerNotFoundError(LookupError):
    """Raised when no handler is registered for a command."""

    def __init__(self, cmd: int) -> None:
        super().__init__(f"not found msg handler cmd:{cmd}")
        self.cmd = cmd


class HandlerRegistry:
    def __init__(self) -> None:
        self._handlers: dict[int, Handler] = {}

    def register(self, cmd: int, handler: Handler) -> None:
        """Register handler for cmd, replacing any earlier one."""
        self._handlers[cmd] = handler
        _log.info("add new cmdId:%d, handler:%r", cmd, handler)

    def get(self, cmd: int) -> Handler:
        try:
            return self._handlers[cmd]
        except KeyError:
            raise HandlerNotFoundError(cmd) from None

    def __contains__(self, cmd: object) -> bool:
        return cmd in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)