from __future__ import annotations

from typing import List, Tuple

import pytest

from ed_engine.actions import execute_command
from ed_engine.buffer import Buffer
from ed_engine.commands import Address, models
from ed_engine.editor import Editor
from ed_engine.errors import (
    BufferModifiedError,
    CommandSyntaxError,
    InvalidAddressError,
    InvalidDestinationError,
    NoFilenameError,
)
from ed_engine.modes import Action


def make_editor(*lines: str, cursor: int | None = None) -> Tuple[Editor, List[str]]:
    output: List[str] = []
    buffer = Buffer.from_lines(lines)
    if cursor is not None:
        buffer.state.set_cursor(cursor)
    return Editor(buffer=buffer, output=output.append), output


def feed(editor: Editor, *lines: str) -> Action:
    action = Action.CONTINUE
    for line in lines:
        action = editor.dispatch(line)
    return action


def test_append_lines_to_empty_buffer() -> None:
    editor, _ = make_editor()

    feed(editor, "a", "Line 1", "Line 2", ".")

    assert editor.lines() == ["Line 1", "Line 2"]
    assert editor.buffer.cursor == 2
    assert editor.buffer.state.dirty is True


def test_delete_moves_cursor_to_following_line() -> None:
    editor, _ = make_editor("Line 1", "Line 2", "Line 3")

    feed(editor, "2d")

    assert editor.lines() == ["Line 1", "Line 3"]
    assert editor.buffer.cursor == 2


def test_delete_last_line_clamps_cursor() -> None:
    editor, _ = make_editor("a", "b", "c")

    feed(editor, "$d")

    assert editor.lines() == ["a", "b"]
    assert editor.buffer.cursor == 2


def test_delete_with_print_suffix_prints_new_current_line() -> None:
    editor, output = make_editor("a", "b", "c")

    feed(editor, "2dp")

    assert editor.lines() == ["a", "c"]
    assert output == ["c"]


def test_delete_on_empty_buffer_fails() -> None:
    editor, _ = make_editor()

    with pytest.raises(InvalidAddressError):
        editor.dispatch("d")
    assert editor.last_error == "Invalid address"


def test_move_block_past_destination() -> None:
    editor, _ = make_editor("A", "B", "C", "D")

    feed(editor, "1,2m4")

    assert editor.lines() == ["C", "D", "A", "B"]
    assert editor.buffer.cursor == 4


def test_move_to_top() -> None:
    editor, _ = make_editor("a", "b", "c")

    feed(editor, "3m0")

    assert editor.lines() == ["c", "a", "b"]
    assert editor.buffer.cursor == 1


@pytest.mark.parametrize("dest", ["1", "2", "3"])
def test_move_into_own_range_fails_and_keeps_buffer(dest: str) -> None:
    editor, _ = make_editor("a", "b", "c", "d")

    with pytest.raises(InvalidDestinationError):
        editor.dispatch(f"1,3m{dest}")
    assert editor.lines() == ["a", "b", "c", "d"]
    assert editor.buffer.cursor == 4
    assert editor.buffer.state.dirty is False


def test_print_range_and_numbered_and_list() -> None:
    editor, output = make_editor("one", "tab\there", "three")

    feed(editor, "1,2p", "2n", "2l")

    assert output == ["one", "tab\there", "2\ttab\there", "tab\\there$"]
    assert editor.buffer.cursor == 2


def test_print_suffix_on_print_command() -> None:
    editor, output = make_editor("one", "two")

    feed(editor, "1pn")

    assert output == ["1\tone"]


def test_whole_buffer_shorthand() -> None:
    editor, output = make_editor("a", "b", "c", cursor=1)

    feed(editor, ",p")

    assert output == ["a", "b", "c"]
    assert editor.buffer.cursor == 3


def test_empty_line_advances_and_prints() -> None:
    editor, output = make_editor("a", "b", cursor=1)

    assert editor.dispatch("") is Action.CONTINUE
    assert output == ["b"]
    assert editor.dispatch("") is Action.UNKNOWN
    assert editor.buffer.cursor == 2


def test_bare_address_jumps_and_prints() -> None:
    editor, output = make_editor("a", "b", "c")

    feed(editor, "1", "+1")

    assert output == ["a", "b"]
    assert editor.buffer.cursor == 2


def test_range_without_command_advances_one_line() -> None:
    editor, output = make_editor("A", "B", "C", "D", cursor=1)

    feed(editor, "1,3")

    assert output == ["B"]
    assert editor.buffer.cursor == 2


def test_offset_out_of_range_fails() -> None:
    editor, _ = make_editor("a", "b")

    with pytest.raises(InvalidAddressError):
        editor.dispatch("+1")
    assert editor.buffer.cursor == 2


def test_insert_before_line() -> None:
    editor, _ = make_editor("b", "c")

    feed(editor, "1i", "a", ".")

    assert editor.lines() == ["a", "b", "c"]
    assert editor.buffer.cursor == 1


def test_append_after_zero() -> None:
    editor, _ = make_editor("b")

    feed(editor, "0a", "a", ".")

    assert editor.lines() == ["a", "b"]
    assert editor.buffer.cursor == 1


def test_change_replaces_range() -> None:
    editor, _ = make_editor("a", "b", "c", "d")

    feed(editor, "2,3c", "X", ".")

    assert editor.lines() == ["a", "X", "d"]
    assert editor.buffer.cursor == 2
    assert editor.buffer.state.dirty is True


def test_change_last_line_keeps_position() -> None:
    editor, _ = make_editor("a", "b", "c")

    feed(editor, "$c", "Z", ".")

    assert editor.lines() == ["a", "b", "Z"]
    assert editor.buffer.cursor == 3


def test_change_with_empty_input_leaves_cursor_on_a_line() -> None:
    editor, _ = make_editor("a", "b")

    feed(editor, "1c", ".")

    assert editor.lines() == ["b"]
    assert editor.buffer.cursor == 1


def test_unforced_quit_warns_once_then_exits() -> None:
    editor, _ = make_editor("a")
    editor.buffer.state.mark_dirty()

    with pytest.raises(BufferModifiedError):
        editor.dispatch("q")
    assert editor.buffer.state.dirty is False
    assert editor.dispatch("q") is Action.QUIT


def test_forced_quit_ignores_dirty_buffer() -> None:
    editor, _ = make_editor("a")
    editor.buffer.state.mark_dirty()

    assert editor.dispatch("Q") is Action.QUIT
    assert editor.quit_on_eof() is Action.QUIT


def test_help_repeats_last_error() -> None:
    editor, output = make_editor("a")

    with pytest.raises(InvalidAddressError):
        editor.dispatch("5p")
    feed(editor, "h")

    assert output == ["Invalid address"]


def test_help_without_error_prints_nothing() -> None:
    editor, output = make_editor("a")

    feed(editor, "h")

    assert output == []


def test_filename_sets_and_reports_path() -> None:
    editor, output = make_editor("a")

    with pytest.raises(NoFilenameError):
        editor.dispatch("f")
    feed(editor, "f notes.txt", "f")

    assert output == ["notes.txt", "notes.txt"]
    assert editor.buffer.state.path == "notes.txt"


def test_execute_command_directly_on_context() -> None:
    editor, output = make_editor("a", "b", "c")

    result = execute_command(
        editor.context,
        models.Print(start=Address.numbered(1), end=Address.offset(-1)),
    )

    assert result.action is Action.CONTINUE
    assert output == ["a", "b"]


def test_bad_suffix_is_a_syntax_error() -> None:
    editor, _ = make_editor("a", "b")

    with pytest.raises(CommandSyntaxError):
        editor.dispatch("1dx")
    assert editor.lines() == ["a", "b"]
