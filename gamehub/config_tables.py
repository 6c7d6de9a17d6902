"""The remaining game data tables and the manager that loads every table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from gamehub.config_store import (
    ACTIVITY_INFO_FILE,
    ACTIVITY_NPC_FILE,
    ActivityInfoConfig,
    ActivityNpcConfig,
    ConfigTable,
    ConfigView,
)

ACTIVITY_PASS_AWARD_FILE = "activitypassaward.txt"
ACTIVITY_NPC_GROUP_FILE = "activityNpcGroup.txt"
SERVER_FILE = "server.txt"


@dataclass(frozen=True)
class ActivityNpcGroupConfig:
    id: int = 0
    defaultani: str = ""
    p1: str = ""
    groupname: str = ""
    clickanilist: str = ""
    movedistance: str = ""
    camerahight: str = ""
    cameradistance: str = ""
    npcdistance: str = ""
    textprefabtype: str = ""


@dataclass(frozen=True)
class ActivityPassAwardConfig:
    id: int = 0
    scheduling: int = 0
    level: int = 0
    paylevel: int = 0
    rechargeshopid: int = 0
    score: int = 0
    freegift: int = 0
    freegiftshow: int = 0
    paygift: int = 0
    paygiftshow: int = 0
    redirectionid: int = 0


@dataclass(frozen=True)
class ServerTableConfig:
    id: int = 0
    name: str = ""
    servertype: int = 0
    port: int = 0
    groupid: int = 0
    groupname: str = ""
    mysqlip: str = ""
    mysqlport: int = 0
    mysqlusername: str = ""
    mysqldbname: str = ""
    mysqlpassword: str = ""
    redisip: str = ""
    redisport: int = 0
    redispassword: str = ""
    redisusername: str = ""
    maxconnectnum: int = 0
    inputsize: str = ""
    outputsize: str = ""
    zoneid: int = 0
    partid: int = 0


# Tables in the order they are loaded.
_TABLES: tuple[tuple[str, type, str], ...] = (
    ("activitypassaward", ActivityPassAwardConfig, ACTIVITY_PASS_AWARD_FILE),
    ("activityNpcGroup", ActivityNpcGroupConfig, ACTIVITY_NPC_GROUP_FILE),
    ("server", ServerTableConfig, SERVER_FILE),
    ("activityNpc", ActivityNpcConfig, ACTIVITY_NPC_FILE),
    ("activityInfo", ActivityInfoConfig, ACTIVITY_INFO_FILE),
)


class ConfigManager:
    """Owns every data table and loads them all from one directory."""

    def __init__(self) -> None:
        self._tables: dict[str, ConfigTable[Any]] = {
            name: ConfigTable(record_type, file_name)
            for name, record_type, file_name in _TABLES
        }

    def load(self, path: str) -> dict[str, ConfigView[Any]]:
        """Load all tables in order; the first failure raises ConfigLoadError."""
        return {name: table.load(path) for name, table in self._tables.items()}

    def table(self, name: str) -> ConfigTable[Any]:
        """Return the table registered under name; raises KeyError if unknown."""
        try:
            return self._tables[name]
        except KeyError:
            raise KeyError(f"unknown config table {name!r}") from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def __iter__(self) -> Iterator[ConfigTable[Any]]:
        return iter(self._tables.values())

    def __repr__(self) -> str:
        return f"ConfigManager(tables={list(self._tables)})"