"""Interactive console loop around the Editor."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Optional, Sequence

from ed_engine.editor import Editor
from ed_engine.errors import EdError
from ed_engine.modes import Action
from ed_engine.runtime import telemetry

ERROR_MARKER = "?"

logger = telemetry.get_logger("ed_engine.cli")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ed-engine", description="Line-oriented text editor in the style of ed."
    )
    parser.add_argument("path", nargs="?", help="file to edit")
    parser.add_argument(
        "-p",
        "--prompt",
        default=os.environ.get("ED_ENGINE_PROMPT", ""),
        help="use PROMPT as an interactive prompt",
    )
    parser.add_argument(
        "-s",
        "--script",
        action="store_true",
        help="suppress byte counts and other diagnostics",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="override ED_ENGINE_LOG_LEVEL for this session",
    )
    return parser.parse_args(argv)


def run(
    editor: Editor,
    *,
    read_line: Optional[Callable[[str], str]] = None,
    write: Callable[[str], None] = print,
) -> int:
    """Feed lines from ``read_line`` (default :func:`input`) to ``editor`` until it quits."""

    read_line = read_line or input
    while True:
        try:
            line = read_line(editor.prompt())
        except KeyboardInterrupt:
            logger.debug("interrupted")
            write(ERROR_MARKER)
            continue
        except EOFError:
            logger.debug("end of input")
            editor.quit_on_eof()
            return 0
        except OSError as exc:
            logger.error("cannot read input: %s", exc)
            return 1

        try:
            action = editor.dispatch(line)
        except EdError:
            write(ERROR_MARKER)
            continue

        if action is Action.QUIT:
            return 0
        if action is Action.UNKNOWN:
            write(ERROR_MARKER)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_level:
        config = telemetry.active_config()
        config.min_level = args.log_level.upper()
        telemetry.configure(config=config)

    editor = Editor(prompt=args.prompt, path=args.path, quiet=args.script)
    size = editor.initial_byte_size()
    if size > 0 and not args.script:
        print(size)
    return run(editor)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
