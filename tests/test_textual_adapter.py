from __future__ import annotations

from typing import List

from ed_engine.adapters.textual import TextualEdAdapter, TextualUIHooks
from ed_engine.buffer import Buffer
from ed_engine.editor import Editor
from ed_engine.modes import Action


def make_adapter(*lines: str) -> tuple[TextualEdAdapter, dict[str, list]]:
    captured: dict[str, list] = {
        "output": [],
        "buffers": [],
        "statuses": [],
        "prompts": [],
        "events": [],
        "exits": [],
    }
    hooks = TextualUIHooks(
        write_output=captured["output"].append,
        update_buffer=lambda mirror: captured["buffers"].append(mirror.text),
        update_status=captured["statuses"].append,
        update_prompt=captured["prompts"].append,
        handle_event=lambda name, payload: captured["events"].append((name, payload)),
        request_exit=lambda: captured["exits"].append(True),
    )
    editor = Editor(prompt=":", buffer=Buffer.from_lines(lines))
    return TextualEdAdapter(editor, hooks), captured


def test_adapter_routes_output_and_buffer_updates() -> None:
    adapter, captured = make_adapter("one", "two")

    assert adapter.submit_line("1p") is Action.CONTINUE

    assert captured["output"] == ["one"]
    assert captured["buffers"][-1] == "one\ntwo"
    assert captured["statuses"][-1] == "command"
    assert captured["prompts"][-1] == ":"


def test_adapter_tracks_input_mode_prompt() -> None:
    adapter, captured = make_adapter()

    adapter.submit_line("a")
    assert captured["prompts"][-1] == ""
    assert captured["statuses"][-1] == "input"

    adapter.submit_line("hello")
    adapter.submit_line(".")

    assert captured["buffers"][-1] == "hello"
    assert captured["prompts"][-1] == ":"
    assert ("input.line", "hello") in captured["events"]
    assert ("mode.switch", "command") in captured["events"]


def test_adapter_renders_errors_as_marker() -> None:
    adapter, captured = make_adapter("one")

    assert adapter.submit_line("5p") is Action.CONTINUE

    assert captured["output"] == ["?"]
    assert captured["statuses"][-1] == "error: Invalid address"
    assert adapter.editor.last_error == "Invalid address"


def test_adapter_marks_unknown_outcome() -> None:
    adapter, captured = make_adapter("only")

    assert adapter.submit_line("") is Action.UNKNOWN
    assert captured["output"] == ["?"]


def test_adapter_requests_exit_on_quit() -> None:
    adapter, captured = make_adapter("one")
    adapter.editor.buffer.state.mark_dirty()

    adapter.submit_line("q")
    assert captured["exits"] == []
    assert captured["output"] == ["?"]

    assert adapter.submit_line("q") is Action.QUIT
    assert captured["exits"] == [True]


def test_adapter_interrupt_and_end_of_input() -> None:
    adapter, captured = make_adapter("one")
    adapter.editor.buffer.state.mark_dirty()

    adapter.interrupt()
    assert captured["output"] == ["?"]

    assert adapter.end_of_input() is Action.QUIT
    assert captured["exits"] == [True]


def test_adapter_reports_writes(tmp_path) -> None:
    adapter, captured = make_adapter("one")
    target = tmp_path / "out.txt"

    adapter.submit_line(f"w {target}")

    assert f"wrote {target}" in captured["statuses"]
    assert captured["output"] == ["4"]


def test_adapter_pull_buffer_mirrors_editor_state() -> None:
    adapter, _ = make_adapter("one", "two")
    adapter.submit_line("1p")

    mirror = adapter.pull_buffer()

    assert mirror.lines == ("one", "two")
    assert mirror.cursor == 1
    assert mirror.mode == "command"
    assert mirror.attributes == {"prompt": ":"}
