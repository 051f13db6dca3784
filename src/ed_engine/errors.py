"""Failure categories raised by the command engine.

Every fallible operation raises one of these instead of terminating the
session. Front ends print ``?`` and keep ``str(error)`` for the ``h`` command.
"""

from __future__ import annotations

from typing import Optional


class EdError(RuntimeError):
    """Base class for all recoverable editor failures."""

    default_message = "error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class CommandSyntaxError(EdError):
    """Raised when a command line cannot be tokenized or parsed."""

    default_message = "Invalid command suffix"


class InvalidAddressError(EdError):
    """Raised when an address is malformed or falls outside the buffer."""

    default_message = "Invalid address"

    def __init__(self, message: Optional[str] = None, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class InvalidDestinationError(EdError):
    default_message = "Invalid destination"


class SubstitutionError(EdError):
    default_message = "Missing pattern delimiter"


class NoPreviousSubstitutionError(EdError):
    default_message = "No previous substitution"


class NoMatchError(EdError):
    default_message = "No match"


class NoFilenameError(EdError):
    default_message = "No current filename"


class FileAccessError(EdError):
    """Raised when the line reader or writer cannot use ``path``."""

    default_message = "Cannot open file"

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class BufferModifiedError(EdError):
    default_message = "Warning: buffer modified"


__all__ = [
    "EdError",
    "CommandSyntaxError",
    "InvalidAddressError",
    "InvalidDestinationError",
    "SubstitutionError",
    "NoPreviousSubstitutionError",
    "NoMatchError",
    "NoFilenameError",
    "FileAccessError",
    "BufferModifiedError",
]
