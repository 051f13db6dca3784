"""Core line storage for ed_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class LineDocument:
    """Ordered, growable list of newline-free text lines.

    Storage is 0-based; the 1-based line numbers users type are translated by
    :class:`~ed_engine.buffer.Buffer`. Every mutation bumps ``version``.
    """

    _lines: List[str] = field(default_factory=list)
    version: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineDocument":
        return cls(_lines=list(lines), version=0)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def splice(self, start: int, end: int, new_lines: Iterable[str]) -> List[str]:
        """Replace ``[start:end]`` with ``new_lines`` and return what was removed."""

        removed = self._lines[start:end]
        self._lines[start:end] = list(new_lines)
        self.version += 1
        return removed

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self.version += 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def byte_size(self) -> int:
        """Size of the document once written with a newline after every line."""

        return sum(len(line.encode("utf-8")) + 1 for line in self._lines)
