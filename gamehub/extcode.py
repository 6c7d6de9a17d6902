"""Recovering hand-written blocks from previously generated files."""

from __future__ import annotations


def _lines(text: str) -> list[str]:
    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [p[:-1] if p.endswith("\r") else p for p in pieces]


def scan_custom_block(path: str, begin: str, end: str) -> str:
    """Return the lines between the begin and end markers, each prefixed by CRLF.

    A file that cannot be read yields an empty string.
    """
    try:
        with open(path, "rb") as fh:
            text = fh.read().decode("utf-8", errors="replace")
    except OSError:
        return ""
    collected = []
    begin_seen = end_seen = False
    for line in _lines(text):
        if begin in line:
            begin_seen = True
        elif end in line:
            end_seen = True
        elif begin_seen and not end_seen:
            collected.append("\r\n" + line)
    return "".join(collected)