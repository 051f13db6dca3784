from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from ed_engine.buffer import Buffer, Mode
from ed_engine.editor import Editor
from ed_engine.errors import EdError
from ed_engine.modes import CommandMode, ModeBus, ModeContext, ModeManager


def make_manager(*lines: str) -> ModeManager:
    context = ModeContext(buffer=Buffer.from_lines(lines), bus=ModeBus())
    manager = ModeManager(context)
    manager.register_mode(CommandMode)
    return manager


def test_editor_starts_in_command_mode_with_prompt() -> None:
    editor = Editor(prompt="*")

    assert editor.mode is Mode.COMMAND
    assert editor.prompt() == "*"
    assert editor.initial_byte_size() == 0


def test_input_mode_hides_prompt_until_terminator() -> None:
    editor = Editor(prompt="*", output=lambda _text: None)

    editor.dispatch("a")
    assert editor.mode is Mode.INPUT
    assert editor.prompt() == ""

    editor.dispatch("  spaced  ")
    editor.dispatch(" .")
    assert editor.mode is Mode.INPUT

    editor.dispatch(".")
    assert editor.mode is Mode.COMMAND
    assert editor.prompt() == "*"
    assert editor.lines() == ["  spaced  ", " ."]


def test_input_mode_does_not_parse_commands() -> None:
    editor = Editor(output=lambda _text: None)

    editor.dispatch("a")
    editor.dispatch("q")
    editor.dispatch("1,$d")
    editor.dispatch(".")

    assert editor.lines() == ["q", "1,$d"]


def test_mode_switch_events_are_published() -> None:
    editor = Editor(output=lambda _text: None)
    switches: List[object] = []
    editor.bus.subscribe("mode.switch", switches.append)

    editor.dispatch("i")
    editor.dispatch(".")

    assert switches == ["input", "command"]


def test_command_events_carry_line_and_error() -> None:
    editor = Editor(buffer=Buffer.from_lines(["a"]), output=lambda _text: None)
    seen: List[Tuple[str, object]] = []
    for name in ("command.submit", "command.executed", "command.error"):
        editor.bus.subscribe(name, lambda payload, name=name: seen.append((name, payload)))

    editor.dispatch(" p ")
    with pytest.raises(EdError):
        editor.dispatch("9p")

    assert seen[0] == ("command.submit", "p")
    assert seen[1][0] == "command.executed"
    assert seen[-1] == ("command.error", "Invalid address")


def test_last_error_survives_successful_commands() -> None:
    editor = Editor(buffer=Buffer.from_lines(["a"]), output=lambda _text: None)

    with pytest.raises(EdError):
        editor.dispatch("3p")
    editor.dispatch("1p")

    assert editor.last_error == "Invalid address"


def test_initial_byte_size_from_file(tmp_path: Path) -> None:
    target = tmp_path / "start.txt"
    target.write_text("hello\nworld\n", encoding="utf-8")

    editor = Editor(path=str(target))

    assert editor.initial_byte_size() == 12
    assert editor.lines() == ["hello", "world"]
    assert editor.buffer.cursor == 2
    assert editor.buffer.state.dirty is False


def test_missing_initial_file_names_empty_buffer(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"

    editor = Editor(path=str(target))

    assert editor.lines() == []
    assert editor.initial_byte_size() == 0
    assert editor.buffer.state.path == str(target)


def test_manager_rejects_duplicate_and_unknown_modes() -> None:
    manager = make_manager("a")

    with pytest.raises(ValueError):
        manager.register_mode(CommandMode)
    with pytest.raises(KeyError):
        manager.switch_mode("visual")


def test_manager_keeps_buffer_mode_in_sync() -> None:
    manager = make_manager("a")

    assert manager.active_mode is not None
    assert manager.active_mode.name == "command"
    assert manager.context.buffer.state.mode is Mode.COMMAND
