"""Roster file parsing.

The accepted format is deliberately naive: the first non-blank line holds
comma-separated headers (case-insensitive, English or Russian names) and
every following line is split on commas positionally. There is no quoting,
so a value containing a comma shifts the remaining cells.
"""
from __future__ import annotations

import re
from typing import List, Sequence

from ..core.enums import StudentStatus
from .model import StudentImportRow

HEADER_ALIASES = {
    "first_name": ("firstname", "имя"),
    "last_name": ("lastname", "фамилия"),
    "email": ("email",),
    "student_id": ("studentid", "зачетка"),
    "group": ("group", "группа"),
    "status": ("status",),
}


def _parse_status(value: str) -> StudentStatus:
    try:
        return StudentStatus(value.strip().lower())
    except ValueError:
        return StudentStatus.ACTIVE


def _cell(headers: Sequence[str], cells: Sequence[str], field: str) -> str:
    for alias in HEADER_ALIASES[field]:
        if alias not in headers:
            continue
        index = headers.index(alias)
        value = cells[index].strip() if index < len(cells) else ""
        if value:
            return value
    return ""


def parse_roster_csv(text: str) -> List[StudentImportRow]:
    lines = [ln for ln in re.split(r"\r?\n", text or "") if ln]
    if len(lines) < 2:
        return []

    headers = [h.strip().lower() for h in lines[0].split(",")]

    rows: List[StudentImportRow] = []
    for line in lines[1:]:
        cells = line.split(",")
        rows.append(
            StudentImportRow(
                first_name=_cell(headers, cells, "first_name"),
                last_name=_cell(headers, cells, "last_name"),
                email=_cell(headers, cells, "email"),
                student_id=_cell(headers, cells, "student_id"),
                group=_cell(headers, cells, "group"),
                status=_parse_status(_cell(headers, cells, "status")),
            )
        )
    return rows
