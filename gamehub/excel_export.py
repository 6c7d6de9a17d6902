"""Turning spreadsheet rows into table definitions and JSON record lines."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

HEADER_ROWS = 6
"""Rows before the data: markers, server titles, client titles, types, descriptions, flags."""

_KILO = 1204
_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class ExcelSheet:
    name: str
    read_cells: list[bool] = field(default_factory=list)
    server_titles: list[str] = field(default_factory=list)
    client_titles: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    descriptions: list[str] = field(default_factory=list)
    write_flags: list[int] = field(default_factory=list)
    records: list[list[str]] = field(default_factory=list)


def _atoi(text: str) -> int | None:
    return int(text) if _INT_RE.fullmatch(text) else None


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    return ch.isspace()


def _title(text: str) -> str:
    """Upper-case the first letter of every word; underscores do not split words."""
    out = []
    prev = " "
    for ch in text:
        if _is_separator(prev):
            upper = ch.upper()
            out.append(upper if len(upper) == 1 else ch)
        else:
            out.append(ch)
        prev = ch
    return "".join(out)


def parse_rows(name: str, rows: Iterable[Sequence[str | None]]) -> ExcelSheet:
    """Read the header rows and the '#'-marked data rows of one sheet.

    Cells are trimmed and lower-cased. Only columns marked '#' in the first row
    are kept. Raises ValueError when a flag is not an integer or a row does not
    fit the header.
    """
    sheet = ExcelSheet(name)
    header_lists = {
        1: sheet.server_titles,
        2: sheet.client_titles,
        3: sheet.types,
        4: sheet.descriptions,
    }
    skip = HEADER_ROWS
    for i, row in enumerate(rows):
        if not row:
            skip += 1
            continue
        for j, raw in enumerate(row):
            cell = ("" if raw is None else str(raw)).strip().lower()
            try:
                if i == 0:
                    sheet.read_cells.append(cell == "#")
                elif i in header_lists:
                    if sheet.read_cells[j]:
                        header_lists[i].append(cell)
                elif i == 5:
                    if sheet.read_cells[j]:
                        flag = _atoi(cell)
                        if flag is None:
                            raise ValueError(
                                f"read file:{name}, row:{i}, cell:{j}, flag {cell!r} is not an integer"
                            )
                        sheet.write_flags.append(flag)
                else:
                    if j == 0:
                        if cell != "#":
                            skip += 1
                            break
                        sheet.records.append([""] * len(sheet.descriptions))
                        continue
                    if sheet.read_cells[j]:
                        if sheet.types[j] == "int":
                            if cell == "":
                                cell = "0"
                            if _atoi(cell) is None:
                                continue
                        index = i - skip
                        if index < 0:
                            raise IndexError(index)
                        sheet.records[index][j] = cell
            except IndexError as exc:
                raise ValueError(
                    f"read file:{name}, row:{i}, cell:{j} does not match the header"
                ) from exc
    return sheet


def format_value(type_name: str, cell: str) -> str:
    """Render a cell as a JSON value: strings are quoted, everything else is bare."""
    if type_name.lower() == "string":
        return '"' + cell.strip() + '"'
    return cell.strip()


def byte_size(cell: str) -> str:
    """Turn a size such as '8k' into a byte count string; '' gives '0'."""
    if cell == "":
        return "0"
    value = _atoi(cell[:-1])
    if value is None:
        raise ValueError(f"col:{cell}, not a size")
    if cell[-1:].lower() == "k":
        value *= _KILO
    return str(value)


def build_json_lines(sheet: ExcelSheet) -> list[str]:
    """One JSON object per record, skipping the marker column."""
    lines = []
    for record in sheet.records:
        parts = [
            f'"{_title(sheet.server_titles[j])}": {format_value(sheet.types[j], col)}'
            for j, col in enumerate(record)
            if j > 0
        ]
        body = "{" + ",".join(parts) if parts else ""
        lines.append(body + "} ")
    return lines


def render_struct_fields(sheet: ExcelSheet) -> str:
    """Field declarations of the record type, one per kept column after the marker."""
    out = []
    for i, title in enumerate(sheet.server_titles):
        if i == 0:
            continue
        name = _title(title)
        if sheet.types[i].lower() == "int":
            out.append(f'{name}    int32  `json:"{name}"`    //{sheet.descriptions[i]} \n')
        else:
            out.append(f'{name}  string `json:"{name}"`  //{sheet.descriptions[i]} \n')
    return "".join(out)