import pytest

from gamehub.rediskeys import GAME_SERVER_STATUS, PLAYER_SERVER_ID, RedisKey


def test_game_server_status():
    assert GAME_SERVER_STATUS.format("Game", "g1") == "GameServerStatus:Game:g1"


def test_player_server_id():
    assert PLAYER_SERVER_ID.format(42) == "PlayerServerId:42"


def test_wrong_argument_count():
    with pytest.raises(ValueError):
        GAME_SERVER_STATUS.format("Game")
    with pytest.raises(ValueError):
        RedisKey("plain").format("extra")