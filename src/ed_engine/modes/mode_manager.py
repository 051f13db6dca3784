"""Mode manager coordinating the Command/Input pipeline."""

from __future__ import annotations

from typing import Dict, Optional, Type

from ed_engine.buffer import Mode as BufferMode
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches lines.

    The buffer state's ``mode`` field mirrors the active mode; only
    :meth:`switch_mode` changes either.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("ed_engine.modes")
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        if mode.name not in {member.value for member in BufferMode}:
            raise ValueError(f"Mode '{mode.name}' is not an editor mode")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.buffer.state.mode = BufferMode(mode.name)
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self.context.buffer.state.mode = BufferMode(name)
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit("mode.switch", name)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_line(self, line: str) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"mode": mode.name},
        ):
            result = mode.handle_line(line)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
