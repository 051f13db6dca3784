"""UI-agnostic ``ed`` command engine."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "commands",
    "modes",
    "runtime",
    "editor",
    "errors",
]

__version__ = "0.1.0"
