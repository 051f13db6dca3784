"""Dispatch a parsed Command to the handler for its variant."""

from __future__ import annotations

from typing import Any, Callable, Dict

from ed_engine.commands import COMMAND_TYPES, Command, models
from ed_engine.modes.base_mode import ModeContext, ModeResult
from ed_engine.runtime import telemetry

from . import core, editing, files

CommandHandler = Callable[[ModeContext, Any], ModeResult]


_COMMAND_HANDLERS: Dict[type[Command], CommandHandler] = {
    models.Noop: core.noop,
    models.Quit: core.quit_editor,
    models.Help: core.show_help,
    models.Jump: core.jump,
    models.Print: core.print_plain,
    models.Numbered: core.print_numbered,
    models.Listing: core.print_listing,
    models.Filename: core.filename,
    models.Delete: editing.delete,
    models.Insert: editing.insert,
    models.Append: editing.append,
    models.Change: editing.change,
    models.Move: editing.move,
    models.Substitute: editing.substitute,
    models.Write: files.write,
    models.Edit: files.edit,
    models.Read: files.read,
}


def _check_exhaustive() -> None:
    missing = [cls.__name__ for cls in COMMAND_TYPES if cls not in _COMMAND_HANDLERS]
    if missing:
        raise RuntimeError(f"No handler registered for {missing}")


_check_exhaustive()


def execute_command(context: ModeContext, command: Command) -> ModeResult:
    """Run ``command`` against the context's buffer to completion."""

    handler = _COMMAND_HANDLERS[type(command)]
    with telemetry.span(
        f"command::{command.name}",
        component="executor",
        metadata={"command": command, "buffer": context.buffer.name},
    ) as handle:
        result = handler(context, command)
        handle.add_metadata("cursor", context.buffer.cursor)
        handle.add_metadata("lines", context.buffer.line_count)
    return result


__all__ = ["execute_command", "CommandHandler"]
