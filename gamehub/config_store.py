"""Game data tables loaded from JSON record files, swapped in atomically on reload."""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, TypeVar

_log = logging.getLogger(__name__)

RECORD_SEPARATOR = "\t\r\n"
"""Separator between the JSON records of a table file."""

ACTIVITY_INFO_FILE = "activityInfo.txt"
ACTIVITY_NPC_FILE = "activityNpc.txt"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

R = TypeVar("R")


class ConfigLoadError(Exception):
    """Raised when a table file cannot be read or one of its records is invalid."""


@dataclass(frozen=True)
class ActivityInfoConfig:
    id: int = 0
    name: str = ""
    opentype: int = 0
    scheduling: int = 0
    openpara1: int = 0
    openpara2: int = 0
    openpara3: int = 0
    timetype: int = 0
    starttime: str = ""
    endtime: str = ""
    specialendtime: str = ""
    freshtime: str = ""
    closetime: int = 0
    closeactivity: int = 0
    openserviceactivity: int = 0
    integraltype: int = 0
    integralstage: str = ""
    integralreward: str = ""
    integralrewardshow: str = ""
    title: str = ""
    picture: str = ""
    description: str = ""
    para1: str = ""
    para2: str = ""
    para3: str = ""
    mailtemplateid: int = 0
    exchangeresources: str = ""
    entertype: int = 0
    sort: int = 0
    des: int = 0
    destime: str = ""
    timedown: int = 0
    despic: str = ""
    rechargeid: str = ""
    iactivitytype: int = 0
    topid: int = 0
    noshow: int = 0
    displayfunctiontype: int = 0
    displayfunctionparam: str = ""


@dataclass(frozen=True)
class ActivityNpcConfig:
    id: int = 0
    config_name: str = ""
    charactermodelid: str = ""
    defaultani: str = ""
    bornshowani: str = ""
    clicktype: str = ""
    clickanilist: str = ""
    clickcameralist: str = ""
    movedistance: str = ""
    cameradistance: str = ""
    clicktext: str = ""
    grouptext: str = ""
    activitytype: str = ""
    param_1: str = ""
    param_2: str = ""
    npcgrounpid: str = ""
    showpriority: str = ""
    decorationid: str = ""
    decorationpoint: str = ""


def split_records(text: str) -> list[str]:
    """Split file text into record lines; a trailing empty piece is dropped."""
    parts = text.split(RECORD_SEPARATOR)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _coerce(value: Any, kind: Any, key: str) -> Any:
    if kind in (int, "int"):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigLoadError(f"field {key!r} must be an integer, got {value!r}")
        if not _INT32_MIN <= value <= _INT32_MAX:
            raise ConfigLoadError(f"field {key!r} out of 32-bit range: {value}")
        return value
    if kind in (str, "str"):
        if not isinstance(value, str):
            raise ConfigLoadError(f"field {key!r} must be a string, got {value!r}")
        return value
    raise ConfigLoadError(f"field {key!r} has unsupported type {kind!r}")


def parse_record(record_type: type[R], line: str) -> R:
    """Build one record from a JSON object; keys match field names case-insensitively."""
    try:
        data = json.loads(line, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ConfigLoadError(f"line:{line} Unmarshal json error:{exc}") from exc
    if data is None:
        return record_type()
    if not isinstance(data, dict):
        raise ConfigLoadError(f"line:{line} is not a JSON object")
    record_fields = {f.name.lower(): f for f in fields(record_type)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        field = record_fields.get(key.lower())
        if field is None or value is None:
            continue
        values[field.name] = _coerce(value, field.type, key)
    return record_type(**values)


class ConfigView(Generic[R]):
    """An immutable snapshot of a loaded table, in file order and by id."""

    def __init__(self, records: Iterable[R] = ()) -> None:
        self.records: tuple[R, ...] = tuple(records)
        self._by_id: dict[int, R] = {getattr(r, "id"): r for r in self.records}

    @property
    def by_id(self) -> Mapping[int, R]:
        return MappingProxyType(self._by_id)

    def get(self, record_id: int) -> R | None:
        """Return the record with this id, or None (logged) when there is none."""
        record = self._by_id.get(record_id)
        if record is None:
            _log.error("not found config id:%d", record_id)
        return record

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[R]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"ConfigView(records={len(self.records)})"


class ConfigTable(Generic[R]):
    """A table file that can be reloaded while readers keep their current view."""

    def __init__(
        self,
        record_type: type[R],
        file_name: str,
        after_load: Callable[[ConfigView[R]], object] | None = None,
    ) -> None:
        self.record_type = record_type
        self.file_name = file_name
        self.after_load = after_load
        self._lock = threading.RLock()
        self._current: ConfigView[R] = ConfigView()

    def load(self, directory: str) -> ConfigView[R]:
        """Read directory/file_name and make it the current view."""
        path = os.path.join(directory, self.file_name)
        with self._lock:
            try:
                with open(path, "rb") as fh:
                    raw = fh.read()
            except OSError as exc:
                raise ConfigLoadError(f"load fileUrl:{directory} error:{exc}") from exc
            text = raw.decode("utf-8", errors="replace")
            try:
                view = ConfigView(
                    parse_record(self.record_type, line) for line in split_records(text)
                )
            except ConfigLoadError as exc:
                raise ConfigLoadError(f"load file:{path}, {exc}") from exc
            if self.after_load is not None:
                self.after_load(view)
            self._current = view
        _log.info("load file:%s, success", path)
        return view

    def current(self) -> ConfigView[R]:
        with self._lock:
            return self._current

    def __repr__(self) -> str:
        return f"ConfigTable({self.record_type.__name__}, {self.file_name!r})"