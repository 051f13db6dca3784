"""Cursor, dirty flag, mode, and path tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mode(str, Enum):
    """The editor's two input states."""

    COMMAND = "command"
    INPUT = "input"


@dataclass(slots=True)
class BufferState:
    """Mutable state tied to a LineDocument.

    ``cursor`` is the 1-based current line, ``0`` only when the buffer is
    empty.
    """

    cursor: int = 0
    dirty: bool = False
    path: Optional[str] = None
    mode: Mode = Mode.COMMAND
    last_error: Optional[str] = None
    last_substitution: Optional[str] = None

    def set_cursor(self, line: int) -> None:
        self.cursor = line

    def mark_dirty(self) -> None:
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False
