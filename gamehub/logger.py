"""File logger with level filtering, caller formatting and size-based rotation."""

from __future__ import annotations

import enum
import os
import sys
import threading
from dataclasses import dataclass
from datetime import datetime

DEFAULT_SPLIT_SIZE = 1024 * 1024 * 1024
"""Size in bytes at which a log file is rotated (1 GiB)."""


class LogLevel(enum.IntEnum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    def __str__(self) -> str:
        return self.name


def _timestamp() -> str:
    now = datetime.now()
    return now.strftime("%Y-%m-%d %H:%M:%S.") + f"{now.microsecond // 1000:03d}"


class Logger:
    """Appends log lines to a file and optionally echoes them to stdout."""

    def __init__(
        self,
        directory: str,
        filename: str,
        *,
        is_format: bool = True,
        split_size: int = DEFAULT_SPLIT_SIZE,
        to_stdout: bool = True,
        level: LogLevel = LogLevel.DEBUG,
    ) -> None:
        self.directory = directory
        self.filename = filename
        self.is_format = is_format
        self.split_size = split_size
        self.to_stdout = to_stdout
        self.level = LogLevel(level)
        self._lock = threading.Lock()
        self._file = self._open()
        self.info(f"init file success path:{self.path}, level:{self.level}")

    @property
    def path(self) -> str:
        return os.path.join(self.directory, self.filename)

    @property
    def closed(self) -> bool:
        return self._file is None

    def _open(self):
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        return open(self.path, "a", encoding="utf-8")

    def _emit(self, level: LogLevel, msg: str) -> None:
        if level < self.level:
            return
        if self.is_format:
            caller = sys._getframe(2)
            line = (
                f"{_timestamp()} [{caller.f_code.co_filename}:{caller.f_lineno}] "
                f"[{level.name}] {msg}"
            )
        else:
            line = msg
        with self._lock:
            if self._file is None:
                raise ValueError(f"logger {self.path} is closed")
            if self.to_stdout:
                print(line)
            self._file.write(line + "\n")
            self._file.flush()
            self._rotate_if_needed()

    def _rotate_if_needed(self) -> None:
        if self._file.tell() < self.split_size:
            return
        self._file.close()
        stamp = datetime.now().strftime("%Y_%m_%d_%H_%M_%S")
        rotated = os.path.join(os.path.dirname(self.path), f"{stamp}_{self.filename}")
        os.replace(self.path, rotated)
        self._file = self._open()

    def debug(self, msg: str) -> None:
        self._emit(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        self._emit(LogLevel.INFO, msg)

    def warn(self, msg: str) -> None:
        self._emit(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        self._emit(LogLevel.ERROR, msg)

    def is_debug(self) -> bool:
        return self.level == LogLevel.DEBUG

    def is_info(self) -> bool:
        return self.level == LogLevel.INFO

    def is_warning(self) -> bool:
        return self.level == LogLevel.WARNING

    def is_error(self) -> bool:
        return self.level == LogLevel.ERROR

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Logger(path={self.path!r}, level={self.level})"


_loggers: dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def get_logger(directory: str, filename: str) -> Logger:
    """Return the shared logger writing to directory/filename, creating it if needed."""
    key = os.path.join(directory, filename)
    with _loggers_lock:
        logger = _loggers.get(key)
        if logger is None or logger.closed:
            logger = Logger(directory, filename)
            _loggers[key] = logger
        return logger


def init_null() -> Logger:
    """Return the system logger under ./logs of the working directory."""
    return get_logger(os.path.join(os.getcwd(), "logs"), "system.log")


@dataclass(frozen=True)
class Loggers:
    system: Logger
    net: Logger
    db: Logger
    rpc: Logger


def init_types(directory: str) -> Loggers:
    """Open the system, net, db and rpc loggers in one directory."""
    return Loggers(
        system=get_logger(directory, "system.log"),
        net=get_logger(directory, "net.log"),
        db=get_logger(directory, "db.log"),
        rpc=get_logger(directory, "rpc.log"),
    )