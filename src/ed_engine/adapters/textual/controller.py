"""Minimal Textual adapter that wires Editor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from ed_engine.buffer import BufferMirror
from ed_engine.editor import Editor
from ed_engine.errors import EdError
from ed_engine.modes import Action

ERROR_MARKER = "?"

_FORWARDED_EVENTS = (
    "command.submit",
    "command.executed",
    "command.error",
    "input.line",
    "mode.switch",
    "file.write",
    "file.read",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    write_output: Callable[[str], None]
    update_buffer: Callable[[BufferMirror], None] = _noop
    update_status: Callable[[str], None] = _noop
    update_prompt: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEdAdapter:
    """Bridges an Editor and its bus events to a Textual-friendly surface.

    Satisfies :class:`~ed_engine.buffer.BufferSync` so hosts can pull a fresh
    mirror at any time.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        editor.context.output = hooks.write_output
        self._subscribe_events()
        self._refresh()

    def submit_line(self, line: str) -> Action:
        """Dispatch one submitted line and surface the outcome."""

        self._log_state("line ->", line=line)
        try:
            action = self.editor.dispatch(line)
        except EdError as exc:
            self.hooks.write_output(ERROR_MARKER)
            self.hooks.update_status(f"error: {exc}")
            self._refresh()
            self._log_state("error <-", error=str(exc))
            return Action.CONTINUE

        if action is Action.UNKNOWN:
            self.hooks.write_output(ERROR_MARKER)
        elif action is Action.QUIT:
            self.hooks.request_exit()
        self.hooks.update_status(self.editor.mode.value)
        self._refresh()
        self._log_state("result <-", action=action.value)
        return action

    def interrupt(self) -> None:
        self.hooks.write_output(ERROR_MARKER)
        self._log_state("interrupt")

    def end_of_input(self) -> Action:
        action = self.editor.quit_on_eof()
        self.hooks.request_exit()
        return action

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in _FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "file.write" and isinstance(payload, dict):
            self.hooks.update_status(f"wrote {payload.get('path')}")

    def pull_buffer(self) -> BufferMirror:
        return self.editor.buffer.mirror(attributes={"prompt": self.editor.prompt()})

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())
        self.hooks.update_prompt(self.editor.prompt())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": buffer.state.mode.value,
            "cursor": buffer.cursor,
            "lines": buffer.line_count,
            "dirty": buffer.state.dirty,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEdAdapter", "TextualUIHooks"]
