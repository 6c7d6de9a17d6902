"""Redis key templates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RedisKey:
    key: str
    desc: str = ""

    def format(self, *args) -> str:
        """Fill the template's %s placeholders with args."""
        try:
            return self.key % tuple(args)
        except TypeError as exc:
            raise ValueError(f"key {self.key!r} does not take {len(args)} arguments") from exc


GAME_SERVER_STATUS = RedisKey(
    "GameServerStatus:%s:%s", "server status GameServerStatus:ServerType:ServerId"
)
PLAYER_SERVER_ID = RedisKey("PlayerServerId:%s", "server node the player is currently on")