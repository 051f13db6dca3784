"""Line buffer, its state, and the file collaborators that fill it."""

from .buffer import Buffer, Transaction
from .document import LineDocument
from .files import byte_count, read_lines, write_lines
from .state import BufferState, Mode
from .sync import BufferMirror, BufferSync
from .validation import ensure_line, ensure_not_empty

__all__ = [
    "LineDocument",
    "BufferState",
    "Mode",
    "Buffer",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "ensure_line",
    "ensure_not_empty",
    "read_lines",
    "write_lines",
    "byte_count",
]
