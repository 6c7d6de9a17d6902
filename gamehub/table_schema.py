"""Reading table definitions from .proto files and producing the MySQL schema."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field
from typing import Iterable, Mapping

DEFAULT_TYPE_LEN = "255"
"""Column length used for strings whose comment gives no len[...]."""

_BASE_TYPES = frozenset(
    {"uint64", "int64", "uint32", "int32", "uint16", "int16", "bool", "string"}
)
_INT_TYPES = frozenset({"uint64", "int64", "uint32", "int32"})
_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class TableField:
    field_type: str
    name: str
    value: int
    type_len: str = DEFAULT_TYPE_LEN
    show_desc: str = ""

    @property
    def camel_name(self) -> str:
        return camel_case(self.name)

    @property
    def is_base_type(self) -> bool:
        return is_base_type(self.field_type)


@dataclass
class TableMessage:
    name: str
    file_name: str
    fields: list[TableField] = field(default_factory=list)


def camel_case(text: str) -> str:
    """Join the underscore-separated parts of text, each with a capital first letter."""
    return "".join(part[:1].upper() + part[1:] for part in text.split("_"))


def is_base_type(field_type: str) -> bool:
    """Whether the type is stored in its own column rather than as an encoded blob."""
    return field_type.strip() in _BASE_TYPES


def db_type(field_type: str, type_len: str) -> str:
    """MySQL column type for a proto field type."""
    if field_type in _INT_TYPES:
        return "int"
    if field_type == "bool":
        return "TINYINT(1)"
    if field_type == "string":
        return "text" if type_len == "text" else f"varchar({type_len})"
    return "mediumblob"


def _parse_field(line: str, original: str) -> TableField | None:
    end = line.find(";")
    if end < 0:
        return None
    line = line[:end].replace("  ", " ")
    sides = line.split("=")
    if len(sides) != 2:
        return None
    left = sides[0].strip().split(" ")
    if len(left) != 2:
        return None
    field_type, name = left
    type_len = DEFAULT_TYPE_LEN
    comment_parts = original.split("//")
    show_desc = comment_parts[1] if len(comment_parts) > 1 else ""
    if field_type == "string" and len(comment_parts) > 1:
        comment = comment_parts[1]
        if "len[" in comment:
            start = comment.index("len[")
            type_len = comment[start + 4:comment.find("]")]
        show_desc = comment
    number = sides[1].strip()
    if not _INT_RE.fullmatch(number):
        return None
    return TableField(field_type, name, int(number), type_len, show_desc)


def parse_table_proto(text: str, file_name: str) -> list[TableMessage]:
    """Parse the messages of one .proto file.

    A message is a 'message Name' line followed by a line holding only '{'.
    A string field's comment may give its column length as len[N]. Blocks
    closed without a message name are dropped.
    """
    messages: list[TableMessage] = []
    current = TableMessage("", file_name)
    begin = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        original = line
        cut = line.find("//")
        if cut > 0:
            line = line[:cut]
        if len(line) > 7 and line[:7] == "message":
            words = line.split(" ")
            if len(words) != 2:
                continue
            current.name = words[1]
            current.file_name = file_name
        elif not begin and current.name and line == "{":
            begin = True
        elif "}" in line:
            if current.name:
                messages.append(current)
            current = TableMessage("", file_name)
            begin = False
        elif begin:
            parsed = _parse_field(line, original)
            if parsed is not None:
                current.fields.append(parsed)
    return messages


def _proto_files(directory: str) -> list[str]:
    found = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        found.extend(
            os.path.join(root, name) for name in sorted(files) if name.endswith(".proto")
        )
    return found


def load_table_protos(directory: str) -> dict[str, TableMessage]:
    """Parse every .proto file under directory, keyed by message name."""
    messages: dict[str, TableMessage] = {}
    for path in _proto_files(directory):
        stem = os.path.splitext(os.path.basename(path))[0]
        with open(path, encoding="utf-8", errors="replace") as fh:
            text = fh.read()
        for message in parse_table_proto(text, stem):
            messages[message.name] = message
    return messages


def _comment(desc: str) -> str:
    return f" COMMENT '{desc}'" if desc else ""


def create_table_sql(message: TableMessage) -> str:
    """CREATE TABLE for the first field, then one ALTER TABLE ADD COLUMN per other field."""
    table = message.file_name.lower()
    sql = []
    previous: TableField | None = None
    for current in message.fields:
        column = db_type(current.field_type, current.type_len)
        if previous is None:
            sql.append(
                f"\r\nCREATE TABLE IF NOT EXISTS `{table}` (`{current.name}` {column} NOT NULL"
                f"{_comment(current.show_desc)},\r\n"
                f"PRIMARY KEY (`{current.name}`)"
                ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci; \n"
            )
        else:
            sql.append(
                f" ALTER TABLE `{table}` ADD COLUMN `{current.name}` {column} NULL"
                f"{_comment(current.show_desc)} AFTER `{previous.name}`; \n"
            )
        previous = current
    return "".join(sql)


def build_init_sql(messages: Iterable[TableMessage] | Mapping[str, TableMessage]) -> str:
    """Schema of every message named like its file, ordered by message name."""
    if isinstance(messages, Mapping):
        messages = messages.values()
    tables = sorted(
        (m for m in messages if m.name.lower() == m.file_name.lower()),
        key=lambda m: m.name,
    )
    return "\r\n".join(create_table_sql(m) for m in tables)


def main(argv: list[str] | None = None) -> int:
    """Write ../script/sql/Init.sql next to the table proto directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    directory = args[0] if args else os.getcwd()
    sql = build_init_sql(load_table_protos(directory))
    out_dir = os.path.join(directory, "..", "script", "sql")
    temp_file = os.path.join(out_dir, "tempInit.sql")
    out_file = os.path.join(out_dir, "Init.sql")
    try:
        with open(temp_file, "w", encoding="utf-8", newline="") as fh:
            fh.write(sql)
        os.replace(temp_file, out_file)
    except OSError as exc:
        print(f"open file tempOutFile: {temp_file}, err: {exc}", file=sys.stderr)
        return 1
    print(f"write {out_file}")
    return 0