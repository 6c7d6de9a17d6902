"""Scanning .proto files for message names and the command enum."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Mapping

CMD_ENUM = "CMD"
CMD_FILE_STEM = "Cmd"

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class ProtoField:
    field_type: str
    name: str
    index: str


@dataclass
class ProtoMessage:
    name: str
    fields: list[ProtoField] = field(default_factory=list)


def _clean(raw: str) -> str | None:
    line = raw.strip()
    if not line:
        return None
    cut = line.find("//")
    if cut > 0:
        line = line[:cut]
    return line


def _split_assignment(line: str) -> list[str] | None:
    end = line.find(";")
    if end < 0:
        return None
    sides = line[:end].split("=")
    return sides if len(sides) == 2 else None


def parse_message_file(text: str) -> list[ProtoMessage]:
    """Messages of a .proto file; 'message Name' must be followed by a lone '{' line."""
    messages: list[ProtoMessage] = []
    current = ProtoMessage("")
    begin = False
    for raw in text.splitlines():
        line = _clean(raw)
        if line is None:
            continue
        if len(line) > 7 and line[:7] == "message":
            words = line.split(" ")
            if len(words) != 2:
                continue
            current = ProtoMessage(words[1])
        elif not begin and current.name and line == "{":
            begin = True
        elif "}" in line:
            messages.append(current)
            current = ProtoMessage(current.name)
            begin = False
        elif begin:
            sides = _split_assignment(line)
            if sides is None:
                continue
            left = sides[0].strip().split(" ")
            if len(left) != 2:
                continue
            current.fields.append(ProtoField(left[0], left[1], sides[1].strip()))
    return messages


def parse_cmd_file(text: str) -> ProtoMessage | None:
    """The CMD enum of the command file, or None when it is not closed."""
    current = ProtoMessage("")
    begin = False
    for raw in text.splitlines():
        line = _clean(raw)
        if line is None:
            continue
        if "enum CMD" in line:
            current.name = CMD_ENUM
        elif not begin and current.name and line == "{":
            begin = True
        elif "}" in line:
            return current
        elif begin:
            sides = _split_assignment(line)
            if sides is None:
                continue
            current.fields.append(ProtoField("enum", sides[0].strip(), sides[1].strip()))
    return None


def map_commands(
    messages: Mapping[str, ProtoMessage],
) -> tuple[dict[int, str], dict[int, str]]:
    """Map command ids to handler names for 'cs' request and 'sc' response messages.

    A message named csX or scX belongs to the CMD entry X; entries without a
    non-zero id are ignored.
    """
    commands: dict[str, int] = {}
    cmd = messages.get(CMD_ENUM)
    if cmd is not None:
        for entry in cmd.fields:
            if _INT_RE.fullmatch(entry.index.strip()):
                commands[entry.name.strip()] = int(entry.index.strip())
    requests: dict[int, str] = {}
    responses: dict[int, str] = {}
    for name in messages:
        if len(name) <= 2:
            continue
        prefix, handler = name[:2], name[2:]
        target = {"cs": requests, "sc": responses}.get(prefix)
        if target is None:
            continue
        cmd_id = commands.get(handler, 0)
        if cmd_id != 0:
            target[cmd_id] = handler
    return requests, responses


def load_proto_dir(directory: str) -> dict[str, ProtoMessage]:
    """Parse every .proto file under directory; Cmd.proto supplies the CMD enum."""
    messages: dict[str, ProtoMessage] = {}
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in sorted(files):
            stem, ext = os.path.splitext(name)
            if ext != ".proto":
                continue
            with open(os.path.join(root, name), encoding="utf-8", errors="replace") as fh:
                text = fh.read()
            if stem == CMD_FILE_STEM:
                cmd = parse_cmd_file(text)
                if cmd is not None:
                    messages[cmd.name] = cmd
            else:
                for message in parse_message_file(text):
                    messages[message.name] = message
    return messages