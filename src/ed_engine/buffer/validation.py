"""Validation helpers shared across buffer services."""

from __future__ import annotations

from ed_engine.errors import InvalidAddressError

from .document import LineDocument


def ensure_line(document: LineDocument, line: int, *, allow_zero: bool = False) -> int:
    """Return ``line`` if it names a line of ``document``.

    ``0`` is accepted only when ``allow_zero`` is set (the position before the
    first line, used by append, insert, read and move).
    """

    lower = 0 if allow_zero else 1
    if line < lower or line > document.line_count:
        raise InvalidAddressError(line=line)
    return line


def ensure_not_empty(document: LineDocument) -> None:
    if document.line_count == 0:
        raise InvalidAddressError()
