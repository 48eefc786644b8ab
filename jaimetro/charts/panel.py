"""Codec for the seven-slot panel stored in a chart cell.

A cell is persisted as three lines with fixed, pipe-delimited positions::

    tl|tr
    ml|mc|mr
    bl|br

Every token holds at most two characters from ``0-9 * # @``.

Cells written before the pipe format used whitespace-separated tokens. A
cell with no ``|`` at all is decoded with that legacy rule; ``serialize``
and ``normalize_cell`` always produce the pipe format.
"""

from __future__ import annotations

import re
from dataclasses import astuple, dataclass, fields

TOKEN_MAX_LEN = 2
DELIMITER = "|"
LINE_SLOTS = (("tl", "tr"), ("ml", "mc", "mr"), ("bl", "br"))

_DISALLOWED = re.compile(r"[^0-9*#@]")
_CELL_DISALLOWED = re.compile(r"[^0-9*#@| ]")
_SPACES = re.compile(r" {2,}")


@dataclass(frozen=True)
class Panel:
    tl: str = ""
    tr: str = ""
    ml: str = ""
    mc: str = ""
    mr: str = ""
    bl: str = ""
    br: str = ""

    def is_empty(self) -> bool:
        return not any(astuple(self))

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def clean_token(raw: str | None) -> str:
    """Trim, drop characters outside the allowed set and clamp the length."""
    if not raw:
        return ""
    return _DISALLOWED.sub("", raw.strip())[:TOKEN_MAX_LEN]


def _split_lines(raw: str) -> list[str]:
    return raw.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _assign(lines: list[list[str]]) -> Panel:
    values: dict[str, str] = {}
    for slots, tokens in zip(LINE_SLOTS, lines + [[]] * len(LINE_SLOTS)):
        for k, slot in enumerate(slots):
            values[slot] = clean_token(tokens[k] if k < len(tokens) else "")
    return Panel(**values)


def _parse_pipe(raw: str) -> Panel:
    lines = _split_lines(raw)[: len(LINE_SLOTS)]
    return _assign([line.split(DELIMITER) for line in lines])


def _parse_legacy(raw: str) -> Panel:
    # Blank lines were dropped by the old editor, so tokens shift upwards
    lines = [line.strip() for line in _split_lines(raw) if line.strip()]
    return _assign([line.split() for line in lines[: len(LINE_SLOTS)]])


def parse(raw: str | None) -> Panel:
    """Decode a stored cell into a Panel."""
    if not raw:
        return Panel()
    if DELIMITER in raw:
        return _parse_pipe(raw)
    return _parse_legacy(raw)


def serialize(panel: Panel) -> str:
    """Encode a Panel as three pipe-delimited lines."""
    return "\n".join(DELIMITER.join(getattr(panel, slot) for slot in slots) for slots in LINE_SLOTS)


def normalize_cell(raw: str | None) -> str:
    """Re-encode a cell in the canonical pipe format, "" for an empty panel."""
    panel = parse(raw)
    if panel.is_empty():
        return ""
    return serialize(panel)


def sanitize_cell(raw: str | None) -> str:
    """Clean cell text submitted by the editor before it is stored.

    Keeps the panel character set plus ``|`` and spaces on at most three
    lines, collapses runs of spaces and drops trailing blank lines. The
    layout is left alone, so a bare ``"42"`` is stored as ``"42"``.
    """
    if not raw:
        return ""
    lines = []
    for line in _split_lines(raw)[: len(LINE_SLOTS)]:
        kept = _CELL_DISALLOWED.sub("", line.replace("\t", " "))
        lines.append(_SPACES.sub(" ", kept).strip())
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
