"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from ed_engine.buffer import Buffer


class Action(str, Enum):
    """What the surrounding loop should do after a line was handled."""

    QUIT = "quit"
    CONTINUE = "continue"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_line``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    action: Action = Action.CONTINUE


def _print_line(text: str) -> None:
    print(text)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and command handler can access."""

    buffer: Buffer
    bus: "ModeBus"
    output: Callable[[str], None] = _print_line
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_line(
        self, line: str
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
