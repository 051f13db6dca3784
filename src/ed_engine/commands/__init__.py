"""Tokenizer, address/range parser, and the command model."""

from .models import (
    COMMAND_TYPES,
    Address,
    AddressKind,
    Command,
    PrintStyle,
    Token,
    TokenKind,
)
from .parser import parse, parse_address
from .tokenizer import tokenize


def parse_line(line: str) -> Command:
    """Tokenize and parse one trimmed command line."""

    return parse(tokenize(line))


__all__ = [
    "Address",
    "AddressKind",
    "Command",
    "COMMAND_TYPES",
    "PrintStyle",
    "Token",
    "TokenKind",
    "tokenize",
    "parse",
    "parse_address",
    "parse_line",
]
