from __future__ import annotations

import pytest

from ed_engine.actions import resolve_address, resolve_range
from ed_engine.buffer import Buffer, LineDocument
from ed_engine.commands import Address
from ed_engine.errors import InvalidAddressError


def make_buffer(*lines: str, cursor: int | None = None) -> Buffer:
    buffer = Buffer.from_lines(lines)
    if cursor is not None:
        buffer.state.set_cursor(cursor)
    return buffer


def test_document_snapshot_and_size() -> None:
    document = LineDocument.from_lines(["a", "b"])

    assert document.snapshot() == ("a", "b")
    assert document.byte_size() == 4


def test_from_lines_puts_cursor_on_last_line() -> None:
    buffer = make_buffer("one", "two", "three")

    assert buffer.cursor == 3
    assert buffer.state.dirty is False


def test_empty_buffer_has_zero_cursor() -> None:
    buffer = Buffer()

    assert buffer.cursor == 0
    assert buffer.is_empty()


def test_insert_and_delete_mark_dirty_and_bump_version() -> None:
    buffer = make_buffer("a", "c")

    buffer.insert_lines(1, ["b"])
    assert buffer.lines() == ["a", "b", "c"]
    assert buffer.state.dirty is True

    removed = buffer.delete_lines(1, 2)
    assert removed == ["a", "b"]
    assert buffer.lines() == ["c"]
    assert buffer.document.version == 2


def test_insert_rejects_position_past_end() -> None:
    buffer = make_buffer("a")

    with pytest.raises(InvalidAddressError):
        buffer.insert_lines(2, ["x"])
    assert buffer.lines() == ["a"]
    assert buffer.state.dirty is False


def test_byte_size_counts_utf8_and_newlines() -> None:
    buffer = make_buffer("héllo", "")

    assert buffer.byte_size() == len("héllo".encode("utf-8")) + 1 + 1


@pytest.mark.parametrize("line", [1, 2, 3])
def test_numbered_resolves_to_itself(line: int) -> None:
    buffer = make_buffer("a", "b", "c", cursor=1)

    assert resolve_address(buffer, Address.numbered(line)) == line


@pytest.mark.parametrize("line", [0, 4, 100])
def test_numbered_out_of_range_fails(line: int) -> None:
    buffer = make_buffer("a", "b", "c")

    with pytest.raises(InvalidAddressError):
        resolve_address(buffer, Address.numbered(line))


def test_zero_allowed_only_when_requested() -> None:
    buffer = make_buffer("a")

    assert resolve_address(buffer, Address.numbered(0), allow_zero=True) == 0


def test_current_and_last_line() -> None:
    buffer = make_buffer("a", "b", "c", "d", cursor=2)

    assert resolve_address(buffer, Address.current()) == 2
    assert resolve_address(buffer, Address.last()) == 4


def test_offsets_are_relative_to_cursor_and_hard_fail() -> None:
    buffer = make_buffer("a", "b", "c", "d", cursor=2)

    assert resolve_address(buffer, Address.offset(2)) == 4
    assert resolve_address(buffer, Address.offset(-1)) == 1
    with pytest.raises(InvalidAddressError):
        resolve_address(buffer, Address.offset(-2))
    with pytest.raises(InvalidAddressError):
        resolve_address(buffer, Address.offset(3))


def test_range_defaults() -> None:
    buffer = make_buffer("a", "b", "c", "d", cursor=3)

    assert resolve_range(buffer, None, None) == (3, 3)
    assert resolve_range(buffer, None, None, whole_buffer=True) == (1, 4)
    assert resolve_range(buffer, Address.numbered(2), None) == (2, 2)
    assert resolve_range(buffer, None, Address.numbered(2)) == (1, 2)
    assert resolve_range(buffer, Address.numbered(2), Address.last()) == (2, 4)


def test_range_rejects_reversed_bounds_and_empty_buffer() -> None:
    buffer = make_buffer("a", "b", "c")

    with pytest.raises(InvalidAddressError):
        resolve_range(buffer, Address.numbered(3), Address.numbered(1))
    with pytest.raises(InvalidAddressError):
        resolve_range(Buffer(), None, None)


def test_mirror_reports_state() -> None:
    buffer = make_buffer("x", "y")
    buffer.state.path = "notes.txt"

    mirror = buffer.mirror()

    assert mirror.text == "x\ny"
    assert mirror.cursor == 2
    assert mirror.mode == "command"
    assert mirror.path == "notes.txt"
