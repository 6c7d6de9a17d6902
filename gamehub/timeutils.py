"""Server clock with an adjustable offset, plus JSON and binary helpers."""

from __future__ import annotations

import dataclasses
import json
import pickle
import threading
import time
from datetime import datetime
from typing import Any

_offset = 0
_offset_lock = threading.Lock()


def now_millis() -> int:
    """Current server time in milliseconds, including the offset."""
    return time.time_ns() // 1_000_000 + _offset


def set_offset(offset: int) -> None:
    """Shift the server clock by offset milliseconds."""
    global _offset
    with _offset_lock:
        _offset = int(offset)


def clear_offset() -> None:
    set_offset(0)


def now_string() -> str:
    """Current server time as 'YYYY-MM-DD HH:MM:SS' in local time."""
    return datetime.fromtimestamp(now_millis() / 1000).strftime("%Y-%m-%d %H:%M:%S")


def is_same_day(t1: int, t2: int) -> bool:
    """Whether two millisecond timestamps fall on the same local calendar day."""
    return datetime.fromtimestamp(t1 / 1000).date() == datetime.fromtimestamp(t2 / 1000).date()


def _plain(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


def to_json(obj: Any) -> str:
    """Serialise obj (dataclasses included) compactly; '{}' when it cannot be encoded."""
    try:
        return json.dumps(_plain(obj), ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return "{}"


def from_json(text: str) -> Any:
    """Parse JSON text; raises ValueError on malformed input."""
    return json.loads(text)


def struct_to_bytes(obj: Any) -> bytes:
    """Encode a Python object to bytes for transfer between servers."""
    return pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL)


def bytes_to_struct(data: bytes) -> Any:
    """Decode bytes produced by struct_to_bytes."""
    try:
        return pickle.loads(data)
    except (pickle.UnpicklingError, EOFError) as exc:
        raise ValueError(f"cannot decode payload: {exc}") from exc