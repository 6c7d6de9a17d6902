import json

import pytest

from gamehub.config_store import ConfigLoadError
from gamehub.config_tables import (
    ActivityNpcGroupConfig,
    ActivityPassAwardConfig,
    ConfigManager,
    ServerTableConfig,
)

SEP = "\t\r\n"

FILES = {
    "activitypassaward.txt": [
        {"Id": 1, "Scheduling": 2, "Level": 3, "Paylevel": 4, "Score": 50},
        {"Id": 2, "Level": 7},
    ],
    "activityNpcGroup.txt": [
        {"Id": 10, "Defaultani": "idle", "Groupname": "group-a"},
    ],
    "server.txt": [
        {
            "Id": 1001,
            "Name": "game",
            "Port": 2001,
            "Mysqlip": "127.0.0.1",
            "Mysqlpassword": "password",
            "Redispassword": "password",
            "Inputsize": "8k",
            "Zoneid": 1,
            "Partid": 2,
        },
    ],
    "activityNpc.txt": [{"Id": 5, "Config_name": "npc"}],
    "activityInfo.txt": [{"Id": 9, "Name": "event", "Sort": 3}],
}


def _write(directory, files):
    for name, records in files.items():
        text = SEP.join(json.dumps(r) for r in records)
        (directory / name).write_text(text, encoding="utf-8")


@pytest.fixture
def conf_dir(tmp_path):
    _write(tmp_path, FILES)
    return tmp_path


def test_load_all_tables(conf_dir):
    manager = ConfigManager()
    views = manager.load(str(conf_dir))
    assert set(views) == set(manager.names)
    assert len(views["activitypassaward"]) == 2
    assert len(views["activityInfo"]) == 1


def test_pass_award_values(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    record = manager.table("activitypassaward").current().get(1)
    assert record == ActivityPassAwardConfig(id=1, scheduling=2, level=3, paylevel=4, score=50)
    assert manager.table("activitypassaward").current().get(2).score == 0


def test_npc_group_values(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    record = manager.table("activityNpcGroup").current().get(10)
    assert isinstance(record, ActivityNpcGroupConfig)
    assert record.defaultani == "idle"
    assert record.groupname == "group-a"


def test_server_values(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    record = manager.table("server").current().get(1001)
    assert isinstance(record, ServerTableConfig)
    assert record.port == 2001
    assert record.inputsize == "8k"
    assert (record.zoneid, record.partid) == (1, 2)


def test_records_keep_file_order(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    ids = [r.id for r in manager.table("activitypassaward").current()]
    assert ids == [1, 2]


def test_missing_id_returns_none(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    assert manager.table("server").current().get(42) is None


def test_unknown_table_name():
    with pytest.raises(KeyError):
        ConfigManager().table("nothing")


def test_missing_file_raises(tmp_path):
    _write(tmp_path, {"activitypassaward.txt": FILES["activitypassaward.txt"]})
    manager = ConfigManager()
    with pytest.raises(ConfigLoadError) as info:
        manager.load(str(tmp_path))
    assert "activityNpcGroup.txt" in str(info.value)
    assert len(manager.table("activitypassaward").current()) == 2


def test_bad_json_raises(conf_dir):
    (conf_dir / "server.txt").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ConfigManager().load(str(conf_dir))


def test_wrong_field_type_raises(conf_dir):
    (conf_dir / "activitypassaward.txt").write_text('{"Id": "one"}', encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ConfigManager().load(str(conf_dir))


def test_reload_swaps_view_and_keeps_old(conf_dir):
    manager = ConfigManager()
    manager.load(str(conf_dir))
    old = manager.table("activityNpcGroup").current()
    _write(conf_dir, {"activityNpcGroup.txt": [{"Id": 11}, {"Id": 12}]})
    manager.load(str(conf_dir))
    new = manager.table("activityNpcGroup").current()
    assert [r.id for r in old] == [10]
    assert [r.id for r in new] == [11, 12]


def test_iterating_manager_gives_every_table():
    manager = ConfigManager()
    assert [t.file_name for t in manager] == [
        "activitypassaward.txt",
        "activityNpcGroup.txt",
        "server.txt",
        "activityNpc.txt",
        "activityInfo.txt",
    ]