"""Input mode: raw lines are added to the buffer until a lone ``.``."""

from __future__ import annotations

from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult

TERMINATOR = "."


class InputMode(Mode):
    name = "input"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.input")

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        buffer = self.context.buffer
        # Insert before line 1 leaves the insertion point at 0.
        if buffer.cursor == 0 and not buffer.is_empty():
            buffer.set_line(1)

    def handle_line(self, line: str) -> ModeResult:
        if line == TERMINATOR:
            return ModeResult(consumed=True, switch_to="command", status="input_end")

        buffer = self.context.buffer
        point = buffer.cursor
        self.logger.debug("inserting line after %d", point)
        buffer.insert_lines(point, [line])
        buffer.state.set_cursor(point + 1)
        self.context.bus.emit("input.line", line)
        return ModeResult(consumed=True, status="input")
