"""Resolve Address requests into concrete line numbers."""

from __future__ import annotations

from typing import Optional, Tuple

from ed_engine.buffer import Buffer, ensure_line, ensure_not_empty
from ed_engine.commands import Address, AddressKind
from ed_engine.errors import InvalidAddressError


def resolve_address(
    buffer: Buffer, address: Address, *, allow_zero: bool = False
) -> int:
    """Return the actual line ``address`` names in ``buffer``.

    The result is in ``[1, len]``, or ``[0, len]`` with ``allow_zero``;
    anything else raises :class:`InvalidAddressError`. Offsets are relative
    to the cursor and must land on a real line.
    """

    kind = address.kind
    if kind is AddressKind.CURRENT_LINE:
        line = buffer.cursor
    elif kind is AddressKind.LAST_LINE:
        line = buffer.line_count
    elif kind is AddressKind.NUMBERED:
        line = address.value
    elif kind is AddressKind.OFFSET:
        line = buffer.cursor + address.value
        if line < 1:
            raise InvalidAddressError(line=line)
    else:  # pragma: no cover - closed enum
        raise InvalidAddressError()
    return ensure_line(buffer.document, line, allow_zero=allow_zero)


def resolve_optional(
    buffer: Buffer, address: Optional[Address], *, allow_zero: bool = False
) -> int:
    """Like :func:`resolve_address`, defaulting to the cursor."""

    if address is None:
        return ensure_line(buffer.document, buffer.cursor, allow_zero=allow_zero)
    return resolve_address(buffer, address, allow_zero=allow_zero)


def resolve_range(
    buffer: Buffer,
    start: Optional[Address],
    end: Optional[Address],
    *,
    whole_buffer: bool = False,
) -> Tuple[int, int]:
    """Resolve an optional ``(start, end)`` pair into inclusive line numbers.

    No addresses means the current line (or every line when
    ``whole_buffer``); only a start means that one line; only an end means
    ``1..end``. The buffer must not be empty.
    """

    ensure_not_empty(buffer.document)
    if start is None and end is None:
        if whole_buffer:
            return 1, buffer.line_count
        line = ensure_line(buffer.document, buffer.cursor)
        return line, line
    if end is None:
        assert start is not None
        line = resolve_address(buffer, start)
        return line, line
    first = 1 if start is None else resolve_address(buffer, start)
    last = resolve_address(buffer, end)
    if first > last:
        raise InvalidAddressError(line=first)
    return first, last
