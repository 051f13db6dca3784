"""Turn a token sequence into a single structured Command."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from ed_engine.errors import (
    CommandSyntaxError,
    InvalidAddressError,
    InvalidDestinationError,
)
from ed_engine.runtime import telemetry

from . import models
from .models import Address, Command, PrintStyle, Token, TokenKind
from .tokenizer import PRINT_SUFFIXES

_OFFSET_RE = re.compile(r"[+-][0-9]+")
_NUMBER_RE = re.compile(r"[0-9]+")

logger = telemetry.get_logger("ed_engine.commands.parser")


def parse_address(text: str) -> Address:
    """Resolve an address literal into an :class:`Address` request."""

    if text == ".":
        return Address.current()
    if text == "$":
        return Address.last()
    if _OFFSET_RE.fullmatch(text):
        return Address.offset(int(text))
    if _NUMBER_RE.fullmatch(text):
        return Address.numbered(int(text))
    raise InvalidAddressError()


@dataclass(slots=True)
class ParsedLine:
    """Intermediate result of one pass over the tokens."""

    start: Optional[Address] = None
    end: Optional[Address] = None
    letter: Optional[str] = None
    suffix: Optional[str] = None
    argument: Optional[str] = None
    separator_found: bool = False
    # Set when a bare separator stood in for 1,$.
    whole_buffer: bool = False

    @property
    def single_address(self) -> Optional[Address]:
        return self.end if self.end is not None else self.start


def _collect(tokens: Sequence[Token]) -> ParsedLine:
    parsed = ParsedLine()
    first_addr = False
    for token in tokens:
        if token.kind is TokenKind.ADDRESS:
            if not first_addr:
                parsed.start = parse_address(token.text)
                first_addr = True
            else:
                parsed.end = parse_address(token.text)
        elif token.kind is TokenKind.SEPARATOR:
            parsed.separator_found = True
            first_addr = True
        elif token.kind is TokenKind.COMMAND:
            parsed.letter = token.text
        elif token.kind is TokenKind.SUFFIX:
            parsed.suffix = token.text
        elif token.kind is TokenKind.ARGUMENT:
            parsed.argument = token.text

    if parsed.separator_found and parsed.start is None and parsed.end is None:
        parsed.start = Address.numbered(1)
        parsed.end = Address.last()
        parsed.whole_buffer = True
    return parsed


def _print_style(suffix: Optional[str]) -> Optional[PrintStyle]:
    if suffix is None:
        return None
    if not suffix or any(char not in PRINT_SUFFIXES for char in suffix):
        raise CommandSyntaxError("Invalid command suffix")
    if PrintStyle.LIST.value in suffix:
        return PrintStyle.LIST
    if PrintStyle.NUMBERED.value in suffix:
        return PrintStyle.NUMBERED
    return PrintStyle.PLAIN


def _reject_suffix(parsed: ParsedLine) -> None:
    if parsed.suffix is not None:
        raise CommandSyntaxError("Invalid command suffix")


def _reject_argument(parsed: ParsedLine) -> None:
    if parsed.argument is not None:
        raise CommandSyntaxError("Unexpected command argument")


def _print_family(parsed: ParsedLine, base: PrintStyle) -> Command:
    _reject_argument(parsed)
    style = _print_style(parsed.suffix)
    if base is PrintStyle.LIST or style is PrintStyle.LIST:
        return models.Listing(start=parsed.start, end=parsed.end)
    if base is PrintStyle.NUMBERED or style is PrintStyle.NUMBERED:
        return models.Numbered(start=parsed.start, end=parsed.end)
    return models.Print(start=parsed.start, end=parsed.end)


def _parse_print(parsed: ParsedLine) -> Command:
    return _print_family(parsed, PrintStyle.PLAIN)


def _parse_numbered(parsed: ParsedLine) -> Command:
    return _print_family(parsed, PrintStyle.NUMBERED)


def _parse_list(parsed: ParsedLine) -> Command:
    return _print_family(parsed, PrintStyle.LIST)


def _parse_delete(parsed: ParsedLine) -> Command:
    _reject_argument(parsed)
    return models.Delete(
        start=parsed.start, end=parsed.end, print_style=_print_style(parsed.suffix)
    )


def _parse_write(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    if parsed.whole_buffer:
        return models.Write(file=parsed.argument)
    return models.Write(start=parsed.start, end=parsed.end, file=parsed.argument)


def _parse_edit(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    return models.Edit(file=parsed.argument)


def _parse_read(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    return models.Read(after=parsed.single_address, file=parsed.argument)


def _parse_insert(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Insert(before=parsed.single_address)


def _parse_append(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Append(after=parsed.single_address)


def _parse_change(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Change(start=parsed.start, end=parsed.end)


def _parse_move(parsed: ParsedLine) -> Command:
    if parsed.suffix is not None and parsed.argument is not None:
        raise CommandSyntaxError("Unexpected command argument")
    target = parsed.suffix if parsed.suffix is not None else parsed.argument
    if target is None:
        raise InvalidDestinationError()
    return models.Move(start=parsed.start, end=parsed.end, dest=parse_address(target))


def _parse_substitute(parsed: ParsedLine) -> Command:
    return models.Substitute(start=parsed.start, end=parsed.end, arg=parsed.argument)


def _parse_quit(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Quit(force=False)


def _parse_force_quit(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Quit(force=True)


def _parse_help(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    _reject_argument(parsed)
    return models.Help()


def _parse_filename(parsed: ParsedLine) -> Command:
    _reject_suffix(parsed)
    return models.Filename(file=parsed.argument)


_LETTER_PARSERS: Dict[str, Callable[[ParsedLine], Command]] = {
    "p": _parse_print,
    "n": _parse_numbered,
    "l": _parse_list,
    "d": _parse_delete,
    "w": _parse_write,
    "e": _parse_edit,
    "r": _parse_read,
    "i": _parse_insert,
    "a": _parse_append,
    "c": _parse_change,
    "m": _parse_move,
    "s": _parse_substitute,
    "q": _parse_quit,
    "Q": _parse_force_quit,
    "h": _parse_help,
    "f": _parse_filename,
}


def parse(tokens: Sequence[Token]) -> Command:
    """Build the Command described by ``tokens``.

    No tokens is a Noop. A single address without a command letter jumps to
    it; a range without one is a Noop. A separator without addresses spans
    the whole buffer.
    """

    if not tokens:
        return models.Noop()

    parsed = _collect(tokens)
    logger.debug("parsed tokens=%s result=%s", tokens, parsed)

    if parsed.letter is None:
        if parsed.start is not None and parsed.end is None:
            return models.Jump(address=parsed.start)
        return models.Noop()

    letter_parser = _LETTER_PARSERS.get(parsed.letter)
    if letter_parser is None:
        raise CommandSyntaxError("Unknown command")
    return letter_parser(parsed)


__all__ = ["parse", "parse_address", "ParsedLine"]
