from __future__ import annotations

import pytest

from ed_engine.commands import Token, tokenize
from ed_engine.errors import CommandSyntaxError


def test_empty_line_has_no_tokens() -> None:
    assert tokenize("") == []


def test_single_address() -> None:
    assert tokenize("1") == [Token.address("1")]


def test_lower_address_only() -> None:
    assert tokenize("1,") == [Token.address("1"), Token.separator(",")]


def test_upper_address_only() -> None:
    assert tokenize(",$") == [Token.separator(","), Token.address("$")]


def test_semicolon_separator() -> None:
    assert tokenize(".;+2p") == [
        Token.address("."),
        Token.separator(";"),
        Token.address("+2"),
        Token.command("p"),
    ]


def test_full_address_with_suffix() -> None:
    assert tokenize("1,$pn") == [
        Token.address("1"),
        Token.separator(","),
        Token.address("$"),
        Token.command("p"),
        Token.suffix("n"),
    ]


def test_only_command() -> None:
    assert tokenize("p") == [Token.command("p")]


def test_command_with_argument() -> None:
    assert tokenize("w file.txt") == [
        Token.command("w"),
        Token.argument("file.txt"),
    ]


def test_argument_is_trimmed() -> None:
    assert tokenize("e   notes.txt  ") == [
        Token.command("e"),
        Token.argument("notes.txt"),
    ]


def test_move_destination_is_a_suffix() -> None:
    assert tokenize("1,2m4") == [
        Token.address("1"),
        Token.separator(","),
        Token.address("2"),
        Token.command("m"),
        Token.suffix("4"),
    ]


def test_substitute_keeps_spaces_in_argument() -> None:
    assert tokenize("2s/a b/c d/g") == [
        Token.address("2"),
        Token.command("s"),
        Token.argument("/a b/c d/g"),
    ]


def test_missing_whitespace_before_argument_fails() -> None:
    with pytest.raises(CommandSyntaxError):
        tokenize("wfile.txt")


def test_suffix_followed_by_argument() -> None:
    assert tokenize("pn extra") == [
        Token.command("p"),
        Token.suffix("n"),
        Token.argument("extra"),
    ]
