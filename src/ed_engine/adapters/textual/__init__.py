"""Textual host adapter. The app itself lives in ``.app`` and needs textual."""

from .controller import TextualEdAdapter, TextualUIHooks

__all__ = ["TextualEdAdapter", "TextualUIHooks"]
