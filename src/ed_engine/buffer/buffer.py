"""High-level buffer façade combining line storage and editor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional

from ed_engine.runtime import telemetry

from .document import LineDocument
from .state import BufferState
from .sync import BufferMirror
from .validation import ensure_line


class Buffer:
    """The one mutable line buffer an editor session works on.

    Line numbers at this API are 1-based. Mutations run inside a
    :class:`Transaction`, which traces them and marks the buffer dirty;
    the caller decides where the cursor ends up.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or LineDocument()
        self.state = state or BufferState()

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, path: Optional[str] = None, name: str = "default"
    ) -> "Buffer":
        document = LineDocument.from_lines(lines)
        state = BufferState(cursor=document.line_count, path=path)
        return cls(name=name, document=document, state=state)

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def is_empty(self) -> bool:
        return self.document.line_count == 0

    def lines(self) -> List[str]:
        return list(self.document.snapshot())

    def lines_between(self, start: int, end: int) -> List[str]:
        """Return lines ``start..end`` inclusive."""

        ensure_line(self.document, start)
        ensure_line(self.document, end)
        return list(self.document.snapshot()[start - 1 : end])

    def set_line(self, line: int) -> None:
        """Move the cursor to ``line``, which must exist."""

        self.state.set_cursor(ensure_line(self.document, line))

    def byte_size(self) -> int:
        return self.document.byte_size()

    def insert_lines(self, after: int, lines: Iterable[str]) -> int:
        """Insert ``lines`` after line ``after`` (``0`` inserts at the top)."""

        ensure_line(self.document, after, allow_zero=True)
        new_lines = list(lines)
        with Transaction(self, "insert_lines") as tx:
            self.document.splice(after, after, new_lines)
            tx.commit(after=after, count=len(new_lines))
        return len(new_lines)

    def delete_lines(self, start: int, end: int) -> List[str]:
        """Remove lines ``start..end`` inclusive and return them."""

        ensure_line(self.document, start)
        ensure_line(self.document, end)
        with Transaction(self, "delete_lines") as tx:
            removed = self.document.splice(start - 1, end, ())
            tx.commit(start=start, end=end)
        return removed

    def replace_line(self, line: int, text: str) -> None:
        ensure_line(self.document, line)
        with Transaction(self, "replace_line") as tx:
            self.document.set_line(line - 1, text)
            tx.commit(line=line)

    def load(self, lines: Iterable[str], *, path: Optional[str] = None) -> None:
        """Discard every line and take ``lines`` as fresh, clean content."""

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"buffer": self.name}
        ):
            self.document = LineDocument.from_lines(lines)
            self.state.set_cursor(self.document.line_count)
            self.state.mark_clean()
            if path is not None:
                self.state.path = path

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            dirty=self.state.dirty,
            mode=self.state.mode.value,
            path=self.state.path,
            attributes=dict(attributes or {}),
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._before_version = 0

    def __enter__(self) -> "Transaction":
        self._before_version = self.buffer.document.version
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(self, **details: object) -> None:
        self.buffer.state.mark_dirty()
        if self._handle is not None:
            for key, value in details.items():
                self._handle.add_metadata(key, value)
            self._handle.add_metadata("version", self.buffer.document.version)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
