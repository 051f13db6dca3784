"""Commands that mutate the line buffer.

Each handler validates every address before touching the buffer, so a
failing command leaves lines, cursor, and dirty flag as they were. The
cursor is reconciled explicitly after every change of buffer length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ed_engine.commands import PrintStyle, models
from ed_engine.commands.tokenizer import PRINT_SUFFIXES
from ed_engine.errors import (
    InvalidDestinationError,
    NoMatchError,
    NoPreviousSubstitutionError,
    SubstitutionError,
)
from ed_engine.modes.base_mode import ModeContext, ModeResult

from .addressing import resolve_address, resolve_optional, resolve_range
from .core import print_current

DELIMITER = "/"
GLOBAL_FLAG = "g"


def delete(context: ModeContext, command: models.Delete) -> ModeResult:
    buffer = context.buffer
    start, end = resolve_range(buffer, command.start, command.end)
    buffer.delete_lines(start, end)
    buffer.state.set_cursor(min(start, buffer.line_count))
    if command.print_style is not None and not buffer.is_empty():
        print_current(context, command.print_style)
    return ModeResult(consumed=True, status="delete")


def _enter_input(context: ModeContext, point: int, status: str) -> ModeResult:
    context.buffer.state.set_cursor(point)
    return ModeResult(consumed=True, switch_to="input", status=status)


def insert(context: ModeContext, command: models.Insert) -> ModeResult:
    before = resolve_optional(context.buffer, command.before, allow_zero=True)
    return _enter_input(context, max(before - 1, 0), "insert")


def append(context: ModeContext, command: models.Append) -> ModeResult:
    after = resolve_optional(context.buffer, command.after, allow_zero=True)
    return _enter_input(context, after, "append")


def change(context: ModeContext, command: models.Change) -> ModeResult:
    buffer = context.buffer
    start, end = resolve_range(buffer, command.start, command.end)
    buffer.delete_lines(start, end)
    buffer.state.mark_dirty()
    # New text goes where the deleted block began, even at the end of the buffer.
    return _enter_input(context, start - 1, "change")


def move(context: ModeContext, command: models.Move) -> ModeResult:
    buffer = context.buffer
    start, end = resolve_range(buffer, command.start, command.end)
    dest = resolve_address(buffer, command.dest, allow_zero=True)
    if start <= dest <= end:
        raise InvalidDestinationError()

    moved = buffer.delete_lines(start, end)
    if dest > end:
        dest -= len(moved)
    buffer.insert_lines(dest, moved)
    buffer.state.set_cursor(dest + len(moved))
    return ModeResult(consumed=True, status="move")


@dataclass(frozen=True, slots=True)
class SubstitutionSpec:
    """A parsed ``/pattern/replacement/flags`` argument."""

    pattern: re.Pattern[str]
    replacement: str
    replace_all: bool = False
    print_style: PrintStyle = PrintStyle.PLAIN

    def apply(self, line: str) -> Tuple[str, int]:
        try:
            return self.pattern.subn(
                self.replacement, line, count=0 if self.replace_all else 1
            )
        except re.error as exc:
            raise SubstitutionError("Invalid replacement") from exc


def _split_fields(text: str) -> List[str]:
    fields: List[str] = []
    current: List[str] = []
    idx = 0
    while idx < len(text):
        char = text[idx]
        if len(fields) == 2:
            current.append(text[idx:])
            break
        if char == "\\" and idx + 1 < len(text):
            nxt = text[idx + 1]
            current.append(nxt if nxt == DELIMITER else char + nxt)
            idx += 2
            continue
        if char == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        idx += 1
    fields.append("".join(current))
    return fields


def _translate_replacement(text: str) -> str:
    """Map ``&`` to the whole match and ``\\&`` to a literal ampersand."""

    out: List[str] = []
    idx = 0
    while idx < len(text):
        char = text[idx]
        if char == "\\" and idx + 1 < len(text):
            nxt = text[idx + 1]
            out.append("&" if nxt == "&" else char + nxt)
            idx += 2
            continue
        out.append(r"\g<0>" if char == "&" else char)
        idx += 1
    return "".join(out)


def parse_substitution(arg: str) -> SubstitutionSpec:
    if not arg.startswith(DELIMITER):
        raise SubstitutionError("Missing pattern delimiter")
    fields = _split_fields(arg[1:])
    if len(fields) < 2:
        raise SubstitutionError("Missing pattern delimiter")
    pattern_text, replacement = fields[0], fields[1]
    flags = fields[2] if len(fields) > 2 else ""

    if not pattern_text:
        raise SubstitutionError("Empty pattern")
    if any(flag != GLOBAL_FLAG and flag not in PRINT_SUFFIXES for flag in flags):
        raise SubstitutionError("Unknown substitution flag")
    try:
        pattern = re.compile(pattern_text)
    except re.error as exc:
        raise SubstitutionError("Invalid pattern") from exc

    style = PrintStyle.PLAIN
    if PrintStyle.LIST.value in flags:
        style = PrintStyle.LIST
    elif PrintStyle.NUMBERED.value in flags:
        style = PrintStyle.NUMBERED
    return SubstitutionSpec(
        pattern=pattern,
        replacement=_translate_replacement(replacement),
        replace_all=GLOBAL_FLAG in flags,
        print_style=style,
    )


def substitute(context: ModeContext, command: models.Substitute) -> ModeResult:
    buffer = context.buffer
    state = buffer.state
    arg: Optional[str] = command.arg or state.last_substitution
    if arg is None:
        raise NoPreviousSubstitutionError()
    spec = parse_substitution(arg)
    state.last_substitution = arg

    start, end = resolve_range(buffer, command.start, command.end)
    changes: List[Tuple[int, List[str]]] = []
    for offset, line in enumerate(buffer.lines_between(start, end)):
        new_line, _ = spec.apply(line)
        if new_line != line:
            changes.append((start + offset, new_line.split("\n")))
    if not changes:
        raise NoMatchError()

    # Bottom-up, so earlier line numbers stay valid while lines are split.
    for line_no, pieces in reversed(changes):
        buffer.replace_line(line_no, pieces[0])
        if len(pieces) > 1:
            buffer.insert_lines(line_no, pieces[1:])
    added = sum(len(pieces) - 1 for _, pieces in changes)
    buffer.set_line(changes[-1][0] + added)
    return print_current(context, spec.print_style)


__all__ = [
    "delete",
    "insert",
    "append",
    "change",
    "move",
    "substitute",
    "parse_substitution",
    "SubstitutionSpec",
]
