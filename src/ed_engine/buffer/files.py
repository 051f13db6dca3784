"""Line-splitting file reader and line-joining file writer."""

from __future__ import annotations

from typing import Iterable, List

from ed_engine.errors import FileAccessError
from ed_engine.runtime import telemetry

logger = telemetry.get_logger("ed_engine.buffer.files")


def read_lines(path: str) -> List[str]:
    """Return the newline-split lines of ``path``.

    A trailing newline does not produce an empty last line; ``\\r\\n`` endings
    are normalized away.
    """

    try:
        with open(
            path, "r", encoding="utf-8", errors="replace", newline=""
        ) as handle:
            text = handle.read()
    except OSError as exc:
        logger.debug("read failed path=%s error=%s", path, exc)
        raise FileAccessError(path) from exc
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_lines(path: str, lines: Iterable[str]) -> int:
    """Write ``lines`` newline-terminated to ``path`` and return the byte count."""

    data = "".join(f"{line}\n" for line in lines).encode("utf-8")
    try:
        with open(path, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        logger.debug("write failed path=%s error=%s", path, exc)
        raise FileAccessError(path) from exc
    return len(data)


def byte_count(lines: Iterable[str]) -> int:
    return sum(len(line.encode("utf-8")) + 1 for line in lines)
