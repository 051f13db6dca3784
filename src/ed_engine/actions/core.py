"""Navigation, printing, and session commands."""

from __future__ import annotations

from ed_engine.commands import PrintStyle, models
from ed_engine.errors import BufferModifiedError, NoFilenameError
from ed_engine.modes.base_mode import Action, ModeContext, ModeResult

from .addressing import resolve_address, resolve_range

_ESCAPES = {
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def list_line(text: str) -> str:
    """Render ``text`` unambiguously, the way the ``l`` command shows it."""

    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        else:
            parts.extend(f"\\{byte:03o}" for byte in char.encode("utf-8"))
    parts.append("$")
    return "".join(parts)


def format_line(line_no: int, text: str, style: PrintStyle) -> str:
    if style is PrintStyle.NUMBERED:
        return f"{line_no}\t{text}"
    if style is PrintStyle.LIST:
        return list_line(text)
    return text


def print_lines(
    context: ModeContext, start: int, end: int, style: PrintStyle
) -> None:
    """Write lines ``start..end`` to the output and leave the cursor on ``end``."""

    buffer = context.buffer
    for offset, text in enumerate(buffer.lines_between(start, end)):
        context.output(format_line(start + offset, text, style))
    buffer.set_line(end)


def print_current(
    context: ModeContext, style: PrintStyle = PrintStyle.PLAIN
) -> ModeResult:
    line, _ = resolve_range(context.buffer, None, None)
    print_lines(context, line, line, style)
    return ModeResult(consumed=True, status="print")


def noop(context: ModeContext, command: models.Noop) -> ModeResult:
    del command
    buffer = context.buffer
    if buffer.cursor >= buffer.line_count:
        return ModeResult(consumed=True, status="noop", action=Action.UNKNOWN)
    buffer.set_line(buffer.cursor + 1)
    return print_current(context)


def show_help(context: ModeContext, command: models.Help) -> ModeResult:
    del command
    error = context.buffer.state.last_error
    if error:
        context.output(error)
    return ModeResult(consumed=True, status="help", message=error)


def quit_editor(context: ModeContext, command: models.Quit) -> ModeResult:
    state = context.buffer.state
    if not command.force and state.dirty:
        # The warning consumes the dirty flag: a second q exits.
        state.mark_clean()
        raise BufferModifiedError()
    return ModeResult(consumed=True, status="quit", action=Action.QUIT)


def jump(context: ModeContext, command: models.Jump) -> ModeResult:
    buffer = context.buffer
    buffer.set_line(resolve_address(buffer, command.address))
    return print_current(context)


def _print_range(
    context: ModeContext,
    command: models.Print | models.Numbered | models.Listing,
    style: PrintStyle,
) -> ModeResult:
    start, end = resolve_range(context.buffer, command.start, command.end)
    print_lines(context, start, end, style)
    return ModeResult(consumed=True, status="print")


def print_plain(context: ModeContext, command: models.Print) -> ModeResult:
    return _print_range(context, command, PrintStyle.PLAIN)


def print_numbered(context: ModeContext, command: models.Numbered) -> ModeResult:
    return _print_range(context, command, PrintStyle.NUMBERED)


def print_listing(context: ModeContext, command: models.Listing) -> ModeResult:
    return _print_range(context, command, PrintStyle.LIST)


def filename(context: ModeContext, command: models.Filename) -> ModeResult:
    state = context.buffer.state
    if command.file:
        state.path = command.file
    if state.path is None:
        raise NoFilenameError()
    context.output(state.path)
    return ModeResult(consumed=True, status="filename", message=state.path)


__all__ = [
    "list_line",
    "format_line",
    "print_lines",
    "print_current",
    "noop",
    "show_help",
    "quit_editor",
    "jump",
    "print_plain",
    "print_numbered",
    "print_listing",
    "filename",
]
