"""Editor façade: one session over one buffer."""

from __future__ import annotations

from typing import Callable, List, Optional

from ed_engine.actions import execute_command
from ed_engine.buffer import Buffer, Mode, read_lines
from ed_engine.commands.models import Quit
from ed_engine.errors import EdError, FileAccessError
from ed_engine.modes import (
    Action,
    CommandMode,
    InputMode,
    ModeBus,
    ModeContext,
    ModeManager,
)
from ed_engine.runtime import telemetry

logger = telemetry.get_logger("ed_engine.editor")


def _print_line(text: str) -> None:
    print(text)


class Editor:
    """Turns raw operator lines into buffer mutations and queries.

    ``dispatch`` raises :class:`~ed_engine.errors.EdError` on failure after
    recording its message as the last error; front ends render that as
    ``?``.
    """

    def __init__(
        self,
        *,
        prompt: str = "",
        path: Optional[str] = None,
        output: Optional[Callable[[str], None]] = None,
        quiet: bool = False,
        buffer: Optional[Buffer] = None,
    ) -> None:
        self._prompt = prompt
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=buffer if buffer is not None else self._initial_buffer(path),
            bus=self.bus,
            output=output or _print_line,
            extras={"quiet": quiet},
        )
        self.manager = ModeManager(self.context)
        self.manager.register_mode(CommandMode)
        self.manager.register_mode(InputMode)
        self._initial_size = self.buffer.byte_size()

    @staticmethod
    def _initial_buffer(path: Optional[str]) -> Buffer:
        if path is None:
            return Buffer()
        try:
            lines = read_lines(path)
        except FileAccessError:
            # A missing file still names the buffer.
            logger.debug("starting empty, cannot read path=%s", path)
            lines = []
        return Buffer.from_lines(lines, path=path)

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def mode(self) -> Mode:
        return self.buffer.state.mode

    @property
    def last_error(self) -> Optional[str]:
        return self.buffer.state.last_error

    def lines(self) -> List[str]:
        return self.buffer.lines()

    def prompt(self) -> str:
        if self.mode is Mode.INPUT:
            return ""
        return self._prompt

    def initial_byte_size(self) -> int:
        return self._initial_size

    def _record(self, exc: EdError) -> None:
        self.buffer.state.last_error = str(exc)
        logger.debug("command failed error=%s", exc)

    def dispatch(self, line: str) -> Action:
        try:
            result = self.manager.handle_line(line)
        except EdError as exc:
            self._record(exc)
            raise
        return result.action

    def quit_on_eof(self) -> Action:
        """End of input: quit without the modified-buffer check."""

        try:
            return execute_command(self.context, Quit(force=True)).action
        except EdError as exc:  # pragma: no cover - forced quit cannot fail
            self._record(exc)
            raise


__all__ = ["Editor"]
