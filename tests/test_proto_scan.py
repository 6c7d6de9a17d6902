from gamehub.proto_scan import (
    ProtoField,
    ProtoMessage,
    load_proto_dir,
    map_commands,
    parse_cmd_file,
    parse_message_file,
)

CMD_PROTO = """syntax = "proto3";
enum CMD
{
  None = 0;
  Login = 100; // login
  Server2Server = 10000;
}
"""

LOGIN_PROTO = """syntax = "proto3";
message csLogin
{
  string name = 1; // player name
  bool male = 2;
}
message scLogin
{
  string name = 1;
}
"""


def test_parse_cmd_file():
    cmd = parse_cmd_file(CMD_PROTO)
    assert cmd.name == "CMD"
    assert [(f.name, f.index) for f in cmd.fields] == [
        ("None", "0"),
        ("Login", "100"),
        ("Server2Server", "10000"),
    ]
    assert all(f.field_type == "enum" for f in cmd.fields)


def test_parse_cmd_file_unclosed_returns_none():
    assert parse_cmd_file("enum CMD\n{\n  Login = 100;\n") is None


def test_parse_message_file():
    messages = parse_message_file(LOGIN_PROTO)
    assert [m.name for m in messages] == ["csLogin", "scLogin"]
    assert messages[0].fields == [
        ProtoField("string", "name", "1"),
        ProtoField("bool", "male", "2"),
    ]
    assert messages[1].fields == [ProtoField("string", "name", "1")]


def test_parse_message_file_skips_bad_lines():
    text = "message M\n{\n  int32 a;\n  repeated int32 b = 2;\n  int32 c = 3;\n}\n"
    [message] = parse_message_file(text)
    assert [f.name for f in message.fields] == ["c"]


def test_map_commands():
    messages = {m.name: m for m in parse_message_file(LOGIN_PROTO)}
    messages["CMD"] = parse_cmd_file(CMD_PROTO)
    messages["csUnknown"] = ProtoMessage("csUnknown")
    messages["csNone"] = ProtoMessage("csNone")
    requests, responses = map_commands(messages)
    assert requests == {100: "Login"}
    assert responses == {100: "Login"}


def test_map_commands_without_cmd_enum():
    messages = {m.name: m for m in parse_message_file(LOGIN_PROTO)}
    assert map_commands(messages) == ({}, {})


def test_load_proto_dir(tmp_path):
    sub = tmp_path / "msg"
    sub.mkdir()
    (tmp_path / "Cmd.proto").write_text(CMD_PROTO, encoding="utf-8")
    (sub / "Login.proto").write_text(LOGIN_PROTO, encoding="utf-8")
    (sub / "readme.txt").write_text("message X\n{\n}\n", encoding="utf-8")
    messages = load_proto_dir(str(tmp_path))
    assert set(messages) == {"CMD", "csLogin", "scLogin"}
    requests, responses = map_commands(messages)
    assert requests == {100: "Login"}
    assert responses == {100: "Login"}