"""Filters that decide whether an incoming package may be processed."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from gamehub.codec import Package

_log = logging.getLogger(__name__)


class PackageFilter(Protocol):
    def do_filter(self, package: Package, channel: Any) -> bool: ...


class DefaultFilter:
    """Lets every package through."""

    def do_filter(self, package: Package, channel: Any) -> bool:
        _log.debug("default filter")
        return True


class IpFilter:
    """Rejects packages from channels whose ``host`` is blocked."""

    def __init__(self, blocked: Iterable[str] = ()) -> None:
        self.blocked = set(blocked)

    def block(self, host: str) -> None:
        self.blocked.add(host)

    def do_filter(self, package: Package, channel: Any) -> bool:
        host = getattr(channel, "host", None)
        if host in self.blocked:
            _log.error("IpFilter check ip is black channel:%s", channel)
            return False
        return True


class FilterChain:
    """Applies filters in order and stops at the first one that rejects."""

    def __init__(self) -> None:
        self._filters: list[PackageFilter] = []

    def add_filter(self, package_filter: PackageFilter) -> None:
        self._filters.append(package_filter)

    def filter(self, package: Package, channel: Any) -> bool:
        for package_filter in self._filters:
            if not package_filter.do_filter(package, channel):
                _log.info("the channel filter no pass, %s", channel)
                return False
        return True

    def __len__(self) -> int:
        return len(self._filters)