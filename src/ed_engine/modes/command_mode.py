"""Command mode: every line is tokenized, parsed, and executed."""

from __future__ import annotations

from ed_engine import actions
from ed_engine.commands import parse_line
from ed_engine.errors import EdError
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class CommandMode(Mode):
    name = "command"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.command")

    def handle_line(self, line: str) -> ModeResult:
        text = line.strip()
        self.context.bus.emit("command.submit", text)
        try:
            command = parse_line(text)
            result = actions.execute_command(self.context, command)
        except EdError as exc:
            self.context.bus.emit("command.error", str(exc))
            raise
        self.context.bus.emit("command.executed", command)
        return result
