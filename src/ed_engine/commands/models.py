"""Dataclasses describing tokens, addresses, and parsed commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    ADDRESS = "address"
    SEPARATOR = "separator"
    COMMAND = "command"
    SUFFIX = "suffix"
    ARGUMENT = "argument"


@dataclass(frozen=True, slots=True)
class Token:
    """Purely lexical piece of a command line."""

    kind: TokenKind
    text: str

    @classmethod
    def address(cls, text: str) -> "Token":
        return cls(TokenKind.ADDRESS, text)

    @classmethod
    def separator(cls, char: str) -> "Token":
        return cls(TokenKind.SEPARATOR, char)

    @classmethod
    def command(cls, letter: str) -> "Token":
        return cls(TokenKind.COMMAND, letter)

    @classmethod
    def suffix(cls, text: str) -> "Token":
        return cls(TokenKind.SUFFIX, text)

    @classmethod
    def argument(cls, text: str) -> "Token":
        return cls(TokenKind.ARGUMENT, text)


class AddressKind(str, Enum):
    CURRENT_LINE = "current_line"
    LAST_LINE = "last_line"
    NUMBERED = "numbered"
    OFFSET = "offset"


@dataclass(frozen=True, slots=True)
class Address:
    """A request to identify a line; resolved against the buffer on use."""

    kind: AddressKind
    value: int = 0

    def __post_init__(self) -> None:
        if self.kind is AddressKind.NUMBERED and self.value < 0:
            raise ValueError("numbered address cannot be negative")

    @classmethod
    def current(cls) -> "Address":
        return cls(AddressKind.CURRENT_LINE)

    @classmethod
    def last(cls) -> "Address":
        return cls(AddressKind.LAST_LINE)

    @classmethod
    def numbered(cls, line: int) -> "Address":
        return cls(AddressKind.NUMBERED, line)

    @classmethod
    def offset(cls, delta: int) -> "Address":
        return cls(AddressKind.OFFSET, delta)

    def __str__(self) -> str:
        if self.kind is AddressKind.CURRENT_LINE:
            return "."
        if self.kind is AddressKind.LAST_LINE:
            return "$"
        if self.kind is AddressKind.OFFSET:
            return f"{self.value:+d}"
        return str(self.value)


class PrintStyle(str, Enum):
    """How a line is rendered by ``p``, ``n`` and ``l`` (and print suffixes)."""

    PLAIN = "p"
    NUMBERED = "n"
    LIST = "l"


class Command:
    """Base class of the closed set of parsed commands."""

    __slots__ = ()

    @property
    def name(self) -> str:
        return type(self).__name__.lower()


@dataclass(frozen=True, slots=True)
class Noop(Command):
    pass


@dataclass(frozen=True, slots=True)
class Quit(Command):
    force: bool = False


@dataclass(frozen=True, slots=True)
class Help(Command):
    pass


@dataclass(frozen=True, slots=True)
class Jump(Command):
    address: Address


@dataclass(frozen=True, slots=True)
class Print(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Numbered(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Listing(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Delete(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None
    print_style: Optional[PrintStyle] = None


@dataclass(frozen=True, slots=True)
class Write(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None
    file: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Insert(Command):
    before: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Append(Command):
    after: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Change(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Edit(Command):
    file: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Read(Command):
    after: Optional[Address] = None
    file: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Move(Command):
    dest: Address
    start: Optional[Address] = None
    end: Optional[Address] = None


@dataclass(frozen=True, slots=True)
class Substitute(Command):
    start: Optional[Address] = None
    end: Optional[Address] = None
    arg: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Filename(Command):
    file: Optional[str] = None


COMMAND_TYPES: tuple[type[Command], ...] = (
    Noop,
    Quit,
    Help,
    Jump,
    Print,
    Numbered,
    Listing,
    Delete,
    Write,
    Insert,
    Append,
    Change,
    Edit,
    Read,
    Move,
    Substitute,
    Filename,
)


__all__ = [
    "TokenKind",
    "Token",
    "AddressKind",
    "Address",
    "PrintStyle",
    "Command",
    "COMMAND_TYPES",
    "Noop",
    "Quit",
    "Help",
    "Jump",
    "Print",
    "Numbered",
    "Listing",
    "Delete",
    "Write",
    "Insert",
    "Append",
    "Change",
    "Edit",
    "Read",
    "Move",
    "Substitute",
    "Filename",
]
