"""Server types, run modes, server configuration and the registry of peer nodes."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml


class ServerType(enum.IntEnum):
    GAME = 0
    LOGIN = 1
    GATE = 2
    SCENE = 3
    GM = 4
    UNKNOWN = 5

    def __str__(self) -> str:
        return "Game" if self is ServerType.GAME else self.name

    @classmethod
    def from_service_name(cls, name: str) -> "ServerType":
        return _SERVICE_NAMES.get(name, cls.UNKNOWN)


_SERVICE_NAMES = {
    "Game": ServerType.GAME,
    "Login": ServerType.LOGIN,
    "Gate": ServerType.GATE,
    "Scene": ServerType.SCENE,
    "Gm": ServerType.GM,
}


class RunModule(enum.IntEnum):
    TEST = 0
    PRESS = 1
    ONLINE = 2
    UNKNOWN = 3

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, text: str) -> "RunModule":
        """Case-insensitive lookup; anything else is UNKNOWN."""
        upper = (text or "").upper()
        if upper in ("TEST", "PRESS", "ONLINE"):
            return cls[upper]
        return cls.UNKNOWN


@dataclass
class DbConfig:
    host: str = ""
    port: int = 0
    user_name: str = ""
    password: str = ""
    db_name: str = ""


@dataclass
class RedisConfig:
    host: str = ""
    port: int = 0
    password: str = ""


@dataclass
class ServerConfig:
    log_dir: str = ""
    db: DbConfig = field(default_factory=DbConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    server_port: int = 0
    server_type: ServerType = ServerType.UNKNOWN
    server_id: str = ""
    run_module: str = ""
    config_path: str = ""
    server_ip: str = ""


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValueError(f"config section {key!r} must be a mapping")
    return value


def _int(value: Any, name: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise ValueError(f"config value {name!r} must be an integer: {value!r}") from None


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def parse_server_config(text: str) -> ServerConfig:
    """Parse the YAML server configuration; raises ValueError on bad input."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"parser config error {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError("server config must be a mapping")
    db = _section(data, "db")
    redis = _section(data, "redis")
    return ServerConfig(
        db=DbConfig(
            host=_str(db.get("host")),
            port=_int(db.get("port"), "db.port"),
            user_name=_str(db.get("userName")),
            password=_str(db.get("passWord")),
            db_name=_str(db.get("dbName")),
        ),
        redis=RedisConfig(
            host=_str(redis.get("host")),
            port=_int(redis.get("port"), "redis.port"),
            password=_str(redis.get("password")),
        ),
        server_port=_int(data.get("serverPort"), "serverPort"),
        run_module=_str(data.get("runModule")),
        config_path=_str(data.get("configPath")),
        server_ip=_str(data.get("serverIp")),
    )


@dataclass
class ServerNode:
    """A peer server reachable for RPC calls."""

    server_type: ServerType
    server_id: str
    server_port: int
    ip: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return (
            f"serverNodeInfo: serverType: {self.server_type} serverId: {self.server_id} "
            f"ipaddr: {self.ip}:{self.server_port}"
        )


class NodeRegistry:
    """Thread-safe map of known server nodes by server id."""

    def __init__(self) -> None:
        self._nodes: dict[str, ServerNode] = {}
        self._lock = threading.RLock()

    def register(self, node: ServerNode) -> None:
        with self._lock:
            self._nodes[node.server_id] = node

    def unregister(self, server_id: str) -> None:
        with self._lock:
            self._nodes.pop(server_id, None)

    def get(self, server_id: str) -> ServerNode | None:
        with self._lock:
            return self._nodes.get(server_id)

    def by_type(self, server_type: ServerType) -> dict[str, ServerNode]:
        with self._lock:
            return {k: v for k, v in self._nodes.items() if v.server_type == server_type}

    def apply_instance(self, is_add: bool, instance: Mapping[str, Any]) -> ServerNode | None:
        """Add or drop the node described by a discovery instance.

        The instance holds ``ip``, ``serviceName`` and ``metadata`` with
        ``serverId`` and ``serverPort``. Returns the node added, if any.
        """
        metadata = dict(instance.get("metadata") or {})
        server_id = _str(metadata.get("serverId"))
        if not is_add:
            self.unregister(server_id)
            return None
        try:
            port = int(metadata.get("serverPort", 0))
        except (TypeError, ValueError):
            port = 0
        node = ServerNode(
            server_type=ServerType.from_service_name(_str(instance.get("serviceName"))),
            server_id=server_id,
            server_port=port,
            ip=_str(instance.get("ip")),
            metadata=metadata,
        )
        self.register(node)
        return node

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)


@dataclass
class ServerContext:
    config: ServerConfig = field(default_factory=ServerConfig)
    nodes: NodeRegistry = field(default_factory=NodeRegistry)

    @property
    def run_module(self) -> RunModule:
        return RunModule.parse(self.config.run_module)

    def is_test(self) -> bool:
        return self.run_module is RunModule.TEST

    def is_press(self) -> bool:
        return self.run_module is RunModule.PRESS

    def is_online(self) -> bool:
        return self.run_module is RunModule.ONLINE