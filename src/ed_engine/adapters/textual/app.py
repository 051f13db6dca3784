"""Executable Textual app that hosts the ed engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ed_engine.adapters.textual.app"
    ) from exc

from ed_engine.buffer import BufferMirror
from ed_engine.editor import Editor
from ed_engine.runtime import telemetry

from .controller import TextualEdAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    prompt_text: str = ""


class EdEngineApp(App[None]):
    """Minimal Textual UI embedding the ed engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#output-log {
		width: 1fr;
		border: round $accent;
	}

	#buffer-view {
		width: 1fr;
		border: round $secondary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "interrupt", "Interrupt"),
        ("ctrl+d", "end_of_input", "End input"),
    ]

    def __init__(self, *, path: Optional[str] = None, prompt: str = ":") -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._prompt = prompt
        self.adapter: TextualEdAdapter | None = None
        self._output_widget: RichLog | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._input_widget: Input | None = None
        self.logger = telemetry.get_logger("ed_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._output_widget = RichLog(id="output-log", markup=False)
            yield self._output_widget
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        self._input_widget = Input(id="command-input")
        yield self._input_widget
        yield Footer()

    def on_mount(self) -> None:
        editor = Editor(prompt=self._prompt, path=self._path)
        hooks = TextualUIHooks(
            write_output=self._write_output,
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_prompt=self._update_prompt,
            request_exit=self.exit,
            log=self.logger.debug,
        )
        self.adapter = TextualEdAdapter(editor, hooks)
        size = editor.initial_byte_size()
        if size > 0:
            self._write_output(str(size))
        if self._input_widget:
            self._input_widget.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        line = event.value
        event.input.value = ""
        self.adapter.submit_line(line)

    def action_interrupt(self) -> None:
        if self.adapter:
            self.adapter.interrupt()

    def action_end_of_input(self) -> None:
        if self.adapter:
            self.adapter.end_of_input()

    def _write_output(self, text: str) -> None:
        if self._output_widget:
            self._output_widget.write(text)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        rows = [
            f"{'>' if number == mirror.cursor else ' '}{number:>5} {line}"
            for number, line in enumerate(mirror.lines, start=1)
        ]
        self._state.buffer_text = "\n".join(rows)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_prompt(self, prompt: str) -> None:
        self._state.prompt_text = prompt
        if self._input_widget:
            self._input_widget.placeholder = prompt or "input (. to end)"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the ed engine Textual front end.")
    parser.add_argument("path", nargs="?", help="file to edit")
    parser.add_argument(
        "-p",
        "--prompt",
        default=os.environ.get("ED_ENGINE_PROMPT", ":"),
        help="prompt shown in the command input (default: ':')",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = EdEngineApp(path=args.path, prompt=args.prompt)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
