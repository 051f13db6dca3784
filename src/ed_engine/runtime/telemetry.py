"""Telemetry services built on :mod:`logging` and rich.

This module exposes a narrow surface area for the rest of the engine:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging its records

Tracing is gated by level and written to stderr (or a file) so it never
mixes with editor output.
"""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional

from rich.console import Console
from rich.logging import RichHandler

from ed_engine.errors import EdError

ENV_PREFIX = "ED_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "ed_engine")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


@dataclass(slots=True)
class TelemetryConfig:
    """Settings applied to the engine's root logger."""

    min_level: str = "WARNING"
    console_output: bool = True
    colored_output: bool = True
    json_format: bool = False
    file_output: str = ""


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "telemetry", {}))
        return json.dumps(payload)


def _resolve_level() -> str:
    return (_env("LOG_LEVEL") or "WARNING").upper()


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(min_level="DEBUG", colored_output=True)
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "ed_engine.log"
        return TelemetryConfig(
            min_level="INFO", console_output=False, file_output=log_path
        )
    if key in {"performance", "performance_analysis"}:
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "ed_engine-performance.log"
        return TelemetryConfig(
            min_level="DEBUG",
            console_output=False,
            json_format=True,
            file_output=log_path,
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        min_level=_resolve_level(),
        console_output=not _env_flag("DISABLE_CONSOLE", False),
        colored_output=not _env_flag("NO_COLOR", False),
        json_format=_env_flag("LOG_JSON", False),
        file_output=_env("LOG_FILE") or DEFAULT_LOG_FILE,
    )


def _install(config: TelemetryConfig) -> None:
    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(config.min_level.upper())
    root.propagate = False

    if config.console_output:
        console = Console(stderr=True, no_color=not config.colored_output)
        handler: logging.Handler = RichHandler(
            console=console, show_path=False, rich_tracebacks=True
        )
        if config.json_format:
            handler.setFormatter(_JsonFormatter())
        root.addHandler(handler)

    if config.file_output:
        file_handler = logging.FileHandler(config.file_output, encoding="utf-8")
        file_handler.setFormatter(
            _JsonFormatter()
            if config.json_format
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> None:
    """Override the active logging configuration.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _install(config)
    _LOGGER_CACHE.clear()


def active_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    assert _ACTIVE_CONFIG is not None
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the engine's root logger."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if not logger_name.startswith(DEFAULT_LOGGER_NAME):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def _resolve_level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).upper())
    if not isinstance(number, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return number


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    log = get_logger(logger_name)
    number = _resolve_level_number(level)
    if not log.isEnabledFor(number):
        return
    payload = {"event": name, **(data or {})}
    log.log(
        number,
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"telemetry": {k: _stringify(v) for k, v in payload.items()}},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        number = _resolve_level_number(level)
        if not self.logger.isEnabledFor(number):
            return
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            number,
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"telemetry": payload},
        )

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})

    def reject(self, reason: str) -> None:
        self._emit("debug", "span::reject", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and (optionally) tag it with a component name.

    Parameters
    ----------
    name:
        Operation name written on the enter/exit records.
    logger_name:
        Target logger; defaults to the engine logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional key/value pairs attached to every record of the span.

    Editor failures (:class:`~ed_engine.errors.EdError`) are logged at DEBUG
    as rejections; anything else is logged as a failure. Both re-raise.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    handle._emit("debug", "span::enter")
    try:
        yield handle
    except EdError as exc:
        handle.reject(str(exc))
        raise
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        handle._emit("debug", "span::exit", {"elapsed_ms": f"{handle.elapsed_ms:.3f}"})


# Initialize the engine logger once the config is ready.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetryConfig",
    "active_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
