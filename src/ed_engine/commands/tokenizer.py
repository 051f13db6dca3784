"""Split a trimmed command line into lexical tokens."""

from __future__ import annotations

from typing import List

from ed_engine.errors import CommandSyntaxError
from ed_engine.runtime import telemetry

from .models import Token

COMMAND_LETTERS = frozenset("pnldwerqQiacmsfh")
SEPARATORS = frozenset(",;")
PRINT_SUFFIXES = frozenset("pnl")
# Letters whose suffix is free-form (move destination) rather than print flags.
FREE_SUFFIX_COMMANDS = frozenset("m")
# Letters that take the rest of the line, spaces included, as their argument.
DELIMITED_ARGUMENT_COMMANDS = frozenset("s")

logger = telemetry.get_logger("ed_engine.commands.tokenizer")


def _find_command(line: str) -> int:
    for idx, char in enumerate(line):
        if char in COMMAND_LETTERS:
            return idx
    return -1


def _tokenize_addresses(addr_part: str) -> List[Token]:
    tokens: List[Token] = []
    sep_idx = next(
        (idx for idx, char in enumerate(addr_part) if char in SEPARATORS), -1
    )
    if sep_idx < 0:
        rest = addr_part.strip()
    else:
        left = addr_part[:sep_idx].strip()
        if left:
            tokens.append(Token.address(left))
        tokens.append(Token.separator(addr_part[sep_idx]))
        rest = addr_part[sep_idx + 1 :].strip()
    if rest:
        tokens.append(Token.address(rest))
    return tokens


def _tokenize_tail(letter: str, tail: str) -> List[Token]:
    tokens: List[Token] = []
    if not tail:
        return tokens

    if letter in DELIMITED_ARGUMENT_COMMANDS:
        arg = tail.strip()
        if arg:
            tokens.append(Token.argument(arg))
        return tokens

    first = tail[0]
    if first == " ":
        arg = tail.strip()
        if arg:
            tokens.append(Token.argument(arg))
        return tokens

    if letter not in FREE_SUFFIX_COMMANDS and first not in PRINT_SUFFIXES:
        raise CommandSyntaxError("Invalid command suffix")

    suffix, _, arg = tail.partition(" ")
    tokens.append(Token.suffix(suffix))
    arg = arg.strip()
    if arg:
        tokens.append(Token.argument(arg))
    return tokens


def tokenize(line: str) -> List[Token]:
    """Return the tokens of ``line``.

    An empty result means "advance one line and print it". Everything before
    the first command letter is the address portion; what follows the letter
    is a suffix (no space) or an argument (after a space).
    """

    command_idx = _find_command(line)
    addr_part = line if command_idx < 0 else line[:command_idx]
    tokens = _tokenize_addresses(addr_part)

    if command_idx >= 0:
        letter = line[command_idx]
        tokens.append(Token.command(letter))
        tokens.extend(_tokenize_tail(letter, line[command_idx + 1 :]))

    logger.debug("tokens line=%r tokens=%s", line, tokens)
    return tokens


__all__ = ["tokenize", "COMMAND_LETTERS", "PRINT_SUFFIXES"]
