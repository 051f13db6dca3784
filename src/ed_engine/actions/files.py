"""Commands that move lines between the buffer and files."""

from __future__ import annotations

from typing import List, Optional

from ed_engine.buffer import byte_count, read_lines, write_lines
from ed_engine.commands import models
from ed_engine.errors import NoFilenameError
from ed_engine.modes.base_mode import ModeContext, ModeResult

from .addressing import resolve_optional, resolve_range


def _target_path(context: ModeContext, explicit: Optional[str]) -> str:
    path = explicit or context.buffer.state.path
    if path is None:
        raise NoFilenameError()
    return path


def report_size(context: ModeContext, size: int) -> None:
    """Print a byte count unless the session runs in script mode."""

    if not context.extras.get("quiet", False):
        context.output(str(size))


def write(context: ModeContext, command: models.Write) -> ModeResult:
    buffer = context.buffer
    path = _target_path(context, command.file)
    lines: List[str] = []
    if not (buffer.is_empty() and command.start is None and command.end is None):
        start, end = resolve_range(
            buffer, command.start, command.end, whole_buffer=True
        )
        lines = buffer.lines_between(start, end)

    size = write_lines(path, lines)
    buffer.state.path = path
    buffer.state.mark_clean()
    context.bus.emit("file.write", {"path": path, "lines": len(lines), "bytes": size})
    report_size(context, size)
    return ModeResult(consumed=True, status="write", message=path)


def edit(context: ModeContext, command: models.Edit) -> ModeResult:
    # Discards unsaved changes without asking.
    path = _target_path(context, command.file)
    lines = read_lines(path)
    context.buffer.load(lines, path=path)
    size = byte_count(lines)
    context.bus.emit("file.read", {"path": path, "lines": len(lines), "bytes": size})
    report_size(context, size)
    return ModeResult(consumed=True, status="edit", message=path)


def read(context: ModeContext, command: models.Read) -> ModeResult:
    buffer = context.buffer
    path = _target_path(context, command.file)
    after = resolve_optional(buffer, command.after, allow_zero=True)
    lines = read_lines(path)

    if lines:
        buffer.insert_lines(after, lines)
        buffer.state.set_cursor(after + len(lines))
    if buffer.state.path is None:
        buffer.state.path = path
    size = byte_count(lines)
    context.bus.emit("file.read", {"path": path, "lines": len(lines), "bytes": size})
    report_size(context, size)
    return ModeResult(consumed=True, status="read", message=path)


__all__ = ["write", "edit", "read", "report_size"]
