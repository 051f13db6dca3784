"""Command executor: one handler per Command variant."""

from .addressing import resolve_address, resolve_optional, resolve_range
from .command import execute_command
from .core import format_line, list_line
from .editing import SubstitutionSpec, parse_substitution

__all__ = [
    "execute_command",
    "resolve_address",
    "resolve_optional",
    "resolve_range",
    "format_line",
    "list_line",
    "parse_substitution",
    "SubstitutionSpec",
]
