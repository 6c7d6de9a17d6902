import pytest

from gamehub.context import (
    NodeRegistry,
    RunModule,
    ServerContext,
    ServerNode,
    ServerType,
    parse_server_config,
)

CONFIG = """
serverPort: 7001
runModule: test
configPath: ../conf
serverIp: 127.0.0.1
db:
  host: db.local
  port: 3306
  userName: root
  passWord: password
  dbName: game
redis:
  host: redis.local
  port: 6379
  password: password
"""


def test_server_type_names():
    assert ServerType.from_service_name("Login") is ServerType.LOGIN
    assert ServerType.from_service_name("Gm") is ServerType.GM
    assert ServerType.from_service_name("nope") is ServerType.UNKNOWN
    assert str(ServerType.GAME) == "Game"
    assert str(ServerType.GATE) == "GATE"


def test_run_module_parse():
    assert RunModule.parse("online") is RunModule.ONLINE
    assert RunModule.parse("Press") is RunModule.PRESS
    assert RunModule.parse("other") is RunModule.UNKNOWN


def test_parse_server_config():
    config = parse_server_config(CONFIG)
    assert config.server_port == 7001
    assert config.config_path == "../conf"
    assert config.server_ip == "127.0.0.1"
    assert config.db.host == "db.local"
    assert config.db.port == 3306
    assert config.db.user_name == "root"
    assert config.db.password == "password"
    assert config.db.db_name == "game"
    assert config.redis.port == 6379


def test_parse_bad_config():
    with pytest.raises(ValueError):
        parse_server_config("serverPort: [1, 2")
    with pytest.raises(ValueError):
        parse_server_config("serverPort: abc")
    with pytest.raises(ValueError):
        parse_server_config("- a list")


def test_context_run_module():
    context = ServerContext(parse_server_config(CONFIG))
    assert context.is_test() is True
    assert context.is_online() is False
    assert context.is_press() is False


def test_registry_by_type():
    registry = NodeRegistry()
    registry.register(ServerNode(ServerType.GAME, "g1", 7001))
    registry.register(ServerNode(ServerType.LOGIN, "l1", 7002))
    assert set(registry.by_type(ServerType.GAME)) == {"g1"}
    registry.unregister("g1")
    assert registry.get("g1") is None
    assert len(registry) == 1


def test_apply_instance_add_and_remove():
    registry = NodeRegistry()
    instance = {
        "ip": "10.0.0.5",
        "serviceName": "Game",
        "metadata": {"serverId": "game1001", "serverPort": "7001"},
    }
    node = registry.apply_instance(True, instance)
    assert registry.get("game1001") is node
    assert node.server_type is ServerType.GAME
    assert node.server_port == 7001
    assert node.ip == "10.0.0.5"
    registry.apply_instance(False, instance)
    assert registry.get("game1001") is None


def test_apply_instance_bad_port():
    registry = NodeRegistry()
    node = registry.apply_instance(
        True, {"serviceName": "Gate", "metadata": {"serverId": "x", "serverPort": "bad"}}
    )
    assert node.server_port == 0
    assert node.server_type is ServerType.GATE